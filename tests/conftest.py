from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from dictionary_utils import DictionaryEntry

STANDARD_CSV = (
    "Слово,Перевод,Часть речи,Комментарий\n"
    "гхал,оставаться,глагол,\n"
    "ана,мать,существительные,\n"
    "слово,существительное,значение,\n"
    "\n"
    "пустой,,,\n"
    "баба,\"отец, папа\",сущ,\"говорят \"\"баба\"\"\"\n"
)

WORKING_CSV = (
    "Слово,Перевод,Часть речи,Комментарий\n"
    "Ана,мама,,\n"
    "джан,душа,,ласковое обращение\n"
    "хгар,снег,,\n"
    "абла,сестра,,\n"
)


@pytest.fixture
def standard_csv() -> str:
    return STANDARD_CSV


@pytest.fixture
def sample_entries() -> list[DictionaryEntry]:
    return [
        DictionaryEntry("гхал", "оставаться", "глагол"),
        DictionaryEntry("ана", "мать", "существительное"),
        DictionaryEntry("баба", "отец, папа", "существительное", 'говорят "баба"'),
    ]


@pytest.fixture
def artifact_path(tmp_path: Path, sample_entries) -> Path:
    path = tmp_path / "assets" / "dictionary.json"
    path.parent.mkdir(parents=True)
    artifact = {
        "metadata": {"name": "test", "totalEntries": len(sample_entries)},
        "entries": [entry.to_dict() for entry in sample_entries],
    }
    path.write_text(json.dumps(artifact, ensure_ascii=False), encoding="utf-8")
    return path


def sheets_transport(routes: dict) -> httpx.MockTransport:
    """
    Serves canned responses keyed by a substring of the request URL.

    A route value is either CSV text (served with 200) or a callable taking the
    request and returning an httpx.Response.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        for fragment, reply in routes.items():
            if fragment in url:
                if callable(reply):
                    return reply(request)
                return httpx.Response(200, content=reply.encode("utf-8"))
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
def sheets_client():
    def make(routes: dict) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=sheets_transport(routes))

    return make


@pytest.fixture
def sheet_routes() -> dict:
    return {"gviz/tq": STANDARD_CSV, "gid=1176528049": WORKING_CSV}
