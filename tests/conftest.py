import pytest


class FakeChromaProvider:
    """Stands in for ChromaProvider: canned collection names and get() results."""

    def __init__(self, url, *, names=None, contents=None, error=None):
        self.url = url
        self.names = names or []
        self.contents = contents or {}
        self.error = error

    def list_collections(self):
        if self.error:
            raise self.error
        return list(self.names)

    def get_collection_contents(self, name):
        if self.error:
            raise self.error
        if name not in self.contents:
            raise ValueError(f"Collection {name} does not exist.")
        return self.contents[name]


@pytest.fixture
def fake_connect():
    """Build a `connect` callable for CollectionService that returns a FakeChromaProvider."""
    def make(**kwargs):
        opened = []

        def connect(url):
            provider = FakeChromaProvider(url, **kwargs)
            opened.append(provider)
            return provider

        connect.opened = opened
        return connect
    return make
