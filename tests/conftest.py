import pytest

from pedigree_flow.chatbot_pipeline import PedigreeChatPipeline
from pedigree_flow.entity_extractor import PetNameMatcher
from pedigree_flow.faq_cache import FaqCache
from pedigree_flow.llm import AdvisorError
from pedigree_flow.pending_actions import PendingActionStore
from pedigree_flow.pet_data import InMemoryPetStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAdvisor:
    """Stands in for OpenAIAdvisor; records every call."""

    def __init__(self, answer: str = "Feed a balanced diet and keep vaccinations current.", fail: bool = False):
        self.answer = answer
        self.fail = fail
        self.calls = []

    async def ask_global(self, query, lang="en", market=None, search_results=None):
        self.calls.append({"kind": "global", "query": query, "lang": lang, "market": market})
        if self.fail:
            raise AdvisorError("service down")
        return self.answer

    async def ask_pet(self, query, lang, context):
        self.calls.append({"kind": "pet", "query": query, "lang": lang, "context": context})
        if self.fail:
            raise AdvisorError("service down")
        return self.answer


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryPetStore()


@pytest.fixture
def faq_cache(store, clock):
    return FaqCache(store, enabled=True, ttl_seconds=300, max_entries=400, min_score=0.48,
                    capture_mode="draft", keywords_limit=12, clock=clock)


@pytest.fixture
def make_pipeline(store, faq_cache, clock):
    def _make(advisor=None, enable_query_pool=False):
        return PedigreeChatPipeline(
            store,
            advisor=advisor,
            matcher=PetNameMatcher(store, ttl_seconds=600, clock=clock),
            faq_cache=faq_cache,
            pending=PendingActionStore(ttl_seconds=60, clock=clock),
            enable_query_pool=enable_query_pool,
        )
    return _make


@pytest.fixture
def make_advisor():
    return FakeAdvisor
