from types import SimpleNamespace

import pytest


class FakeModels:
    """Stands in for `genai.Client().models`."""

    def __init__(self, text=None, exc=None):
        self.text = text
        self.exc = exc
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(text=self.text)


class FakeGenai:
    def __init__(self, text=None, exc=None):
        self.models = FakeModels(text=text, exc=exc)


@pytest.fixture
def fake_genai():
    return FakeGenai
