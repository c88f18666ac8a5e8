import itertools
import json
from types import SimpleNamespace

import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from assistant_proxy import dependencies
from assistant_proxy.main import app


def not_found(message="Not found"):
    request = httpx.Request("GET", "https://api.openai.com/v1/test")
    return openai.NotFoundError(message, response=httpx.Response(404, request=request), body=None)


def server_error(message="Boom"):
    request = httpx.Request("GET", "https://api.openai.com/v1/test")
    return openai.InternalServerError(message, response=httpx.Response(500, request=request), body=None)


class FakeAsyncPage:
    """
    Async-iterable stand-in for the SDK paginator.

    Each step uses the previous item as its cursor, so deleting that item
    while iterating fails the next fetch with a 404.
    """

    def __init__(self, associations, error=None):
        self.associations = associations
        self.error = error

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        if self.error is not None:
            raise self.error
        snapshot = list(self.associations)
        for i, file_id in enumerate(snapshot):
            if i > 0 and snapshot[i - 1] not in self.associations:
                raise not_found(f"No file found with id '{snapshot[i - 1]}'")
            yield self.associations[file_id]


class FakeFiles:
    def __init__(self, store):
        self.store = store
        self.uploads = []
        self.create_error = None
        self.retrieve_errors = {}

    async def create(self, file, purpose):
        if self.create_error is not None:
            raise self.create_error
        filename, content, mime_type = file
        streamed = not isinstance(content, bytes)
        data = content.read() if streamed else content
        file_id = f"file-{next(self.store.ids)}"
        self.uploads.append(
            {"filename": filename, "data": data, "mime_type": mime_type, "purpose": purpose, "streamed": streamed}
        )
        self.store.stored[file_id] = filename
        return SimpleNamespace(id=file_id, filename=filename)

    async def retrieve(self, file_id):
        if file_id in self.retrieve_errors:
            raise self.retrieve_errors[file_id]
        if file_id not in self.store.stored:
            raise not_found(f"No such File object: {file_id}")
        return SimpleNamespace(id=file_id, filename=self.store.stored[file_id])


class FakeVectorStoreFiles:
    def __init__(self, store):
        self.store = store
        self.deleted = []
        self.list_error = None
        self.delete_error = None

    async def create(self, vector_store_id, file_id):
        self.store.associations[file_id] = SimpleNamespace(
            id=file_id, vector_store_id=vector_store_id, status="in_progress", last_error=None
        )
        return self.store.associations[file_id]

    def list(self, vector_store_id):
        return FakeAsyncPage(self.store.associations, self.list_error)

    async def retrieve(self, file_id, vector_store_id):
        if file_id not in self.store.associations:
            raise not_found(f"No file found with id '{file_id}'")
        return self.store.associations[file_id]

    async def delete(self, file_id, vector_store_id):
        if self.delete_error is not None:
            raise self.delete_error
        if file_id not in self.store.associations:
            raise not_found(f"No file found with id '{file_id}'")
        del self.store.associations[file_id]
        self.deleted.append(file_id)
        return SimpleNamespace(id=file_id, deleted=True)


class FakeEvent:
    def __init__(self, event, data):
        self.event = event
        self.data = data

    def model_dump_json(self):
        return json.dumps({"event": self.event, "data": self.data})


class FakeRunStream:
    def __init__(self, events, error=None):
        self.events = events
        self.error = error
        self.closed = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for event in self.events:
            yield event
            if self.error is not None:
                raise self.error

    async def close(self):
        self.closed = True


class FakeThreads:
    def __init__(self, store):
        self.store = store
        self.messages = SimpleNamespace(create=self._create_message)
        self.runs = SimpleNamespace(create=self._create_run)
        self.posted = []
        self.run_calls = []
        self.create_error = None
        self.message_error = None
        self.stream_error = None
        self.last_stream = None

    async def create(self):
        if self.create_error is not None:
            raise self.create_error
        return SimpleNamespace(id=f"thread_{next(self.store.ids)}")

    async def _create_message(self, thread_id, role, content):
        if self.message_error is not None:
            raise self.message_error
        self.posted.append({"thread_id": thread_id, "role": role, "content": content})
        return SimpleNamespace(id="msg_1")

    async def _create_run(self, thread_id, assistant_id, tools, stream):
        self.run_calls.append({"thread_id": thread_id, "assistant_id": assistant_id, "tools": tools, "stream": stream})
        self.last_stream = FakeRunStream(
            [
                FakeEvent("thread.run.created", {"id": "run_1"}),
                FakeEvent("thread.message.delta", {"delta": {"content": [{"text": {"value": "Hola"}}]}}),
                FakeEvent("thread.run.completed", {"id": "run_1"}),
            ],
            self.stream_error,
        )
        return self.last_stream


class FakeOpenAI:
    """In-memory stand-in for the parts of AsyncOpenAI the service calls."""

    def __init__(self):
        self.ids = itertools.count(1)
        self.stored = {}
        self.associations = {}
        self.files = FakeFiles(self)
        self.vector_stores = SimpleNamespace(files=FakeVectorStoreFiles(self))
        self.beta = SimpleNamespace(threads=FakeThreads(self))


class FakeVisionLLM:
    def __init__(self, text="Factura 001\nTotal: 42"):
        self.text = text
        self.calls = []
        self.error = None

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.text)


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def fake_vision():
    return FakeVisionLLM()


@pytest.fixture
def client(fake_openai, fake_vision):
    dependencies.set_openai(fake_openai)
    dependencies.set_vision_llm(fake_vision)
    yield TestClient(app)
    dependencies.set_openai(None)
    dependencies.set_vision_llm(None)
