"""Pytest configuration for backend tests."""

import asyncio
import hashlib
import json
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple, Union

import httpx
import pytest

from prompt_gitter.repositories import GitHubClient, GitHubContentsRepository, Session
from prompt_gitter.services import PromptSyncService
from prompt_gitter.utils.helpers import decode_content, encode_content

USERNAME = "octocat"
REPO = "ai_prompts"


class FakeGitHub:
    """In-memory GitHub host behind an httpx.MockTransport.

    Implements the repository probe and creation endpoints and the contents
    API with sha checks: updating or deleting an existing file needs its
    current sha (422 when missing, 409 when stale).
    """

    def __init__(self, username: str = USERNAME, repo: str = REPO, repo_exists: bool = True):
        self.username = username
        self.repo = repo
        self.repo_exists = repo_exists
        self.files: Dict[str, Tuple[str, str]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.commits: List[str] = []
        self.failures: Dict[Tuple[str, str], Union[int, str]] = {}
        self._revision = 0
        self._gate: Optional[asyncio.Event] = None
        self._gate_size = 0
        self._gate_count = 0

    @property
    def contents_prefix(self) -> str:
        return f"/repos/{self.username}/{self.repo}/contents/"

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def seed(self, path: str, text: str) -> str:
        self._revision += 1
        sha = hashlib.sha1(f"{self._revision}:{text}".encode()).hexdigest()
        self.files[path] = (text, sha)
        return sha

    def seed_index(self, prompts: List[dict]) -> str:
        return self.seed("metadata.json", json.dumps({"prompts": prompts}, indent=2))

    def text(self, path: str) -> Optional[str]:
        entry = self.files.get(path)
        return entry[0] if entry else None

    def sha(self, path: str) -> Optional[str]:
        entry = self.files.get(path)
        return entry[1] if entry else None

    def index(self) -> dict:
        return json.loads(self.text("metadata.json"))

    def calls_to(self, file_path: str) -> List[str]:
        return [method for method, path in self.calls if path == self.contents_prefix + file_path]

    def hold_index_reads(self, count: int) -> None:
        """Hold every metadata.json read until ``count`` reads have arrived."""
        self._gate = asyncio.Event()
        self._gate_size = count
        self._gate_count = 0

    @staticmethod
    def _json(status_code: int, payload: dict) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path
        self.calls.append((method, path))

        if path.startswith(self.contents_prefix):
            file_path = path[len(self.contents_prefix):]
            forced = self.failures.get((method, file_path))
            if forced == "network":
                raise httpx.ConnectError("connection refused", request=request)
            if forced is not None:
                return self._json(forced, {"message": f"Forced failure for {file_path}"})
            if method == "GET":
                response = self._get(file_path)
                if file_path == "metadata.json" and self._gate is not None:
                    self._gate_count += 1
                    if self._gate_count >= self._gate_size:
                        self._gate.set()
                    await self._gate.wait()
                return response
            body = json.loads(request.content or b"{}")
            if method == "PUT":
                return self._put(file_path, body)
            if method == "DELETE":
                return self._delete(file_path, body)

        if path == f"/repos/{self.username}/{self.repo}" and method == "GET":
            if self.repo_exists:
                return self._json(200, {"name": self.repo, "private": False})
            return self._json(404, {"message": "Not Found"})

        if path == "/user/repos" and method == "POST":
            body = json.loads(request.content)
            if self.repo_exists:
                return self._json(422, {"message": "Repository creation failed."})
            self.repo_exists = body["name"] == self.repo
            return self._json(201, {"name": body["name"], "private": body["private"]})

        return self._json(404, {"message": "Not Found"})

    def _get(self, file_path: str) -> httpx.Response:
        if file_path not in self.files:
            return self._json(404, {"message": "Not Found"})
        text, sha = self.files[file_path]
        encoded = encode_content(text)
        wrapped = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60))
        return self._json(200, {
            "type": "file",
            "path": file_path,
            "sha": sha,
            "encoding": "base64",
            "content": wrapped + "\n",
        })

    def _check_sha(self, file_path: str, body: dict) -> Optional[httpx.Response]:
        current = self.files[file_path][1]
        if not body.get("sha"):
            return self._json(422, {"message": "Invalid request.\n\n\"sha\" wasn't supplied."})
        if body["sha"] != current:
            return self._json(409, {"message": f"{file_path} does not match {body['sha']}"})
        return None

    def _put(self, file_path: str, body: dict) -> httpx.Response:
        existed = file_path in self.files
        if existed:
            rejected = self._check_sha(file_path, body)
            if rejected is not None:
                return rejected
        text = decode_content(body["content"])
        sha = self.seed(file_path, text)
        self.commits.append(body["message"])
        return self._json(200 if existed else 201, {
            "content": {"path": file_path, "sha": sha},
            "commit": {"message": body["message"]},
        })

    def _delete(self, file_path: str, body: dict) -> httpx.Response:
        if file_path not in self.files:
            return self._json(404, {"message": "Not Found"})
        rejected = self._check_sha(file_path, body)
        if rejected is not None:
            return rejected
        del self.files[file_path]
        self.commits.append(body["message"])
        return self._json(200, {"content": None, "commit": {"message": body["message"]}})


class StepClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def session():
    return Session(username=USERNAME, access_token="gho_test_token")


@pytest.fixture
def github_client(session, fake_github):
    return GitHubClient(session, transport=fake_github.transport())


@pytest.fixture
def contents(github_client):
    return GitHubContentsRepository(github_client)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def sync_service(contents, clock):
    return PromptSyncService(contents, clock=clock)
