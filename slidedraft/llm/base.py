from __future__ import annotations
from typing import List, Dict, Any, Optional
from abc import ABC, abstractmethod
import asyncio
import threading

import requests

from .errors import BackendUnavailable, raise_for_status

Generation = Dict[str, str]  # {"generated_text": "..."}


class BaseGenerator(ABC):
    timeout: int = 120

    def __init__(self):
        self.headers: Dict[str, str] = {"Content-Type": "application/json"}
        self._local = threading.local()
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """One requests.Session per thread, since agenerate calls run on worker threads."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    @session.setter
    def session(self, session: requests.Session) -> None:
        # an explicitly assigned session is shared by every thread
        self._session = session

    @abstractmethod
    def generate(self, prompt: str, *, max_new_tokens: int, **kwargs) -> List[Generation]:
        """Return the continuations produced for the prompt."""
        raise NotImplementedError

    async def agenerate(self, prompt: str, *, max_new_tokens: int, **kwargs) -> List[Generation]:
        # requests blocks, so the call runs in a worker thread and the caller just awaits it
        return await asyncio.to_thread(self.generate, prompt, max_new_tokens=max_new_tokens, **kwargs)

    def load(self) -> None:
        """Warm the model up once before the first real call. No-op unless a backend needs it."""

    def _post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise BackendUnavailable(f"POST {url} failed: {e}") from e

        if resp.status_code >= 400:
            body = {}
            try:
                body = resp.json()
            except ValueError:
                pass
            raise_for_status(resp.status_code, message=f"POST {url}", payload=body)

        try:
            return resp.json()
        except ValueError as e:
            raise BackendUnavailable(f"POST {url} returned non-JSON body") from e
