import json

from click.testing import CliRunner

from slidedraft.cli import cli
from slidedraft.commands import draft as draft_cmd
from slidedraft.llm.base import BaseGenerator
from slidedraft.llm.errors import ServerError
from slidedraft.refine.invoker import FALLBACK_CONTENT

DRAFTS = {
    "opener": {"title": "AI in education", "content": ""},
    "core": {"title": "Uses", "content": "tutoring, grading, feedback"},
    "closer": {"title": "Next steps", "content": "pilot in one school"},
}


class ScriptedGenerator(BaseGenerator):
    def __init__(self, fail=False):
        super().__init__()
        self.fail = fail
        self.loaded = 0
        self.prompts = []

    def load(self):
        self.loaded += 1

    def generate(self, prompt, *, max_new_tokens, **kwargs):
        self.prompts.append(prompt)
        if self.fail and "bullet points" in prompt:
            raise ServerError("out of memory")
        if "bullet points" in prompt:
            return [{"generated_text": '{"title": "How AI helps", "content": "- Tutoring\\n- Grading\\n- Feedback"}'}]
        return [{"generated_text": "Sure! Here is your slide."}]


def _invoke(tmp_path, monkeypatch, gen, *extra):
    monkeypatch.setattr(draft_cmd, "build_generator", lambda cfg: gen)
    drafts = tmp_path / "drafts.json"
    drafts.write_text(json.dumps(DRAFTS), encoding="utf-8")
    out = tmp_path / "deck.html"
    args = ["--config", str(tmp_path / "config.toml"), *extra,
            "draft", "--input", str(drafts), "--output", str(out), "--no-review", "--tone", "Academic"]
    return CliRunner().invoke(cli, args), out


def test_draft_renders_deck(tmp_path, monkeypatch):
    gen = ScriptedGenerator()
    result, out = _invoke(tmp_path, monkeypatch, gen, "--quiet")
    assert result.exit_code == 0, result.output
    assert gen.loaded == 1
    assert len(gen.prompts) == 3
    assert any('INPUT: {"title": "AI in education", "content": ""}' in p for p in gen.prompts)

    page = out.read_text(encoding="utf-8")
    assert "<li>Tutoring</li><li>Grading</li><li>Feedback</li>" in page
    assert "<h2>AI in education</h2>" in page
    assert FALLBACK_CONTENT in page
    assert "dist/theme/serif.css" in page


def test_draft_json_output(tmp_path, monkeypatch):
    result, _ = _invoke(tmp_path, monkeypatch, ScriptedGenerator(), "--json")
    assert result.exit_code == 0, result.output
    start = result.output.index("{")
    end = result.output.rindex("}") + 1
    data = json.loads(result.output[start:end])
    assert data["core"] == {"title": "How AI helps", "content": "- Tutoring\n- Grading\n- Feedback"}
    assert data["opener"]["content"] == FALLBACK_CONTENT


def test_draft_invocation_fault_writes_nothing(tmp_path, monkeypatch):
    result, out = _invoke(tmp_path, monkeypatch, ScriptedGenerator(fail=True))
    assert result.exit_code == 1
    assert not out.exists()


def test_render_command(tmp_path):
    slides = tmp_path / "slides.json"
    slides.write_text(json.dumps([{"title": "A", "content": "- x"}, {"title": "B", "content": "y"}]),
                      encoding="utf-8")
    out = tmp_path / "deck.html"
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "c.toml"), "render",
                                      "--input", str(slides), "--output", str(out), "--tone", "Engaging"])
    assert result.exit_code == 0, result.output
    page = out.read_text(encoding="utf-8")
    assert "<h2>A</h2><ul><li>x</li></ul>" in page
    assert "dist/theme/sky.css" in page


def test_prompts_show():
    result = CliRunner().invoke(cli, ["--config", "/nonexistent/c.toml", "prompts", "show",
                                      "--tone", "Engaging", "--role", "closer"])
    assert result.exit_code == 0
    assert result.output.startswith("CONTEXT: You are an AI assistant creating an engaging")


def test_setup_then_doctor(tmp_path):
    path = tmp_path / "config.toml"
    result = CliRunner().invoke(cli, ["--config", str(path), "setup", "--llm-provider", "ollama",
                                      "--model", "phi3", "--ollama-base", "http://localhost:11434",
                                      "--tone", "Engaging"])
    assert result.exit_code == 0, result.output
    result = CliRunner().invoke(cli, ["--config", str(path), "config", "doctor"])
    assert result.exit_code == 0, result.output
    assert "Config OK" in result.output


def test_doctor_flags_missing_provider(tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.toml"), "config", "doctor"])
    assert result.exit_code == 2
    assert "No LLM provider configured" in result.output


class HeadingGenerator(ScriptedGenerator):
    def generate(self, prompt, *, max_new_tokens, **kwargs):
        if "bullet points" in prompt:
            return [{"generated_text": '{"title": "T", "content": "## Results\\n- a\\n- b"}'}]
        return super().generate(prompt, max_new_tokens=max_new_tokens, **kwargs)


def test_draft_without_review_keeps_markdown_headings(tmp_path, monkeypatch):
    result, out = _invoke(tmp_path, monkeypatch, HeadingGenerator(), "--quiet")
    assert result.exit_code == 0, result.output
    page = out.read_text(encoding="utf-8")
    assert "<h2>T</h2><ul><li>## Results</li><li>a</li><li>b</li></ul>" in page


def test_draft_bad_profile_tone_is_usage_error(tmp_path, monkeypatch):
    monkeypatch.setattr(draft_cmd, "build_generator", lambda cfg: ScriptedGenerator())
    config = tmp_path / "config.toml"
    config.write_text('[default]\ntone = "academic"\n', encoding="utf-8")
    drafts = tmp_path / "drafts.json"
    drafts.write_text(json.dumps(DRAFTS), encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(config), "draft", "--input", str(drafts),
                                      "--output", str(tmp_path / "deck.html"), "--no-review"])
    assert result.exit_code == 2
    assert "Unknown tone 'academic'" in result.output
    assert not (tmp_path / "deck.html").exists()


def test_render_orders_role_keyed_input(tmp_path):
    slides = tmp_path / "slides.json"
    slides.write_text(json.dumps({
        "closer": {"title": "C", "content": "z"},
        "opener": {"title": "A", "content": "x"},
        "core": {"title": "B", "content": "- y"},
    }), encoding="utf-8")
    out = tmp_path / "deck.html"
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "c.toml"), "render",
                                      "--input", str(slides), "--output", str(out)])
    assert result.exit_code == 0, result.output
    page = out.read_text(encoding="utf-8")
    assert page.index("<h2>A</h2>") < page.index("<h2>B</h2>") < page.index("<h2>C</h2>")


def test_render_rejects_malformed_input(tmp_path):
    out = tmp_path / "deck.html"
    for payload in ({"opener": {"title": "A", "content": "x"}}, ["just text"]):
        slides = tmp_path / "slides.json"
        slides.write_text(json.dumps(payload), encoding="utf-8")
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "c.toml"), "render",
                                          "--input", str(slides), "--output", str(out)])
        assert result.exit_code == 2, result.output
        assert not out.exists()
