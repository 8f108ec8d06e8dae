"""Tests for the Neighbor Resolver."""

from rank_kernel.models.entity import EntityKind, OrderedEntity
from rank_kernel.models.position import Neighbors, Position
from rank_kernel.ordering.resolver import NeighborResolver
from rank_kernel.store.memory import InMemoryStore


def _make_list(entity_id: str, rank: int) -> OrderedEntity:
    return OrderedEntity(id=entity_id, kind=EntityKind.LIST, rank=rank, title=entity_id)


class TestNeighborResolver:
    def setup_method(self):
        self.store = InMemoryStore()
        # Persist out of order; the resolver must see ascending rank
        self.store.persist_all([
            _make_list("c", 3072),
            _make_list("a", 1024),
            _make_list("b", 2048),
        ])
        self.resolver = NeighborResolver(self.store)

    def test_after_anchor_in_middle(self):
        # Wire beforeId="a": a ends up immediately before the moved entity
        n = self.resolver.get_neighbors(None, Position.from_anchors(before_id="a"))
        assert n == Neighbors(left_rank=1024, right_rank=2048)

    def test_after_last_anchor(self):
        n = self.resolver.get_neighbors(None, Position.after("c"))
        assert n == Neighbors(left_rank=3072, right_rank=None)

    def test_before_anchor_in_middle(self):
        # Wire afterId="b": b ends up immediately after the moved entity
        n = self.resolver.get_neighbors(None, Position.from_anchors(after_id="b"))
        assert n == Neighbors(left_rank=1024, right_rank=2048)

    def test_before_first_anchor(self):
        n = self.resolver.get_neighbors(None, Position.before("a"))
        assert n == Neighbors(left_rank=None, right_rank=1024)

    def test_at_start(self):
        n = self.resolver.get_neighbors(None, Position.at_start())
        assert n == Neighbors(left_rank=None, right_rank=1024)

    def test_at_end(self):
        n = self.resolver.get_neighbors(None, Position.at_end())
        assert n == Neighbors(left_rank=3072, right_rank=None)

    def test_missing_anchor_appends_at_end(self):
        n = self.resolver.get_neighbors(None, Position.before("ghost"))
        assert n == Neighbors(left_rank=3072, right_rank=None)

        n = self.resolver.get_neighbors(None, Position.after("ghost"))
        assert n == Neighbors(left_rank=3072, right_rank=None)

    def test_empty_scope(self):
        n = self.resolver.get_neighbors("empty_list", Position.at_start())
        assert n == Neighbors()

        n = self.resolver.get_neighbors("empty_list", Position.after("a"))
        assert n == Neighbors()

    def test_excluded_entity_is_skipped(self):
        # Moving b after a: b itself must not be the right neighbor
        n = self.resolver.get_neighbors(None, Position.after("a"), exclude_id="b")
        assert n == Neighbors(left_rank=1024, right_rank=3072)

    def test_anchor_equal_to_excluded_is_missing(self):
        n = self.resolver.get_neighbors(None, Position.after("b"), exclude_id="b")
        assert n == Neighbors(left_rank=3072, right_rank=None)

    def test_scopes_are_isolated(self):
        self.store.persist(OrderedEntity(
            id="item_1", kind=EntityKind.ITEM, scope="a", rank=5, title="i",
        ))
        n = self.resolver.get_neighbors(None, Position.at_start())
        assert n.right_rank == 1024

        n = self.resolver.get_neighbors("a", Position.at_end())
        assert n == Neighbors(left_rank=5, right_rank=None)
