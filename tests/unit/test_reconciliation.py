"""
Tests for reconciliation against the token store.

Covers create-vs-update decisions, idempotent re-runs, partial failure
containment and index building.
"""

import pytest

from token_sync.notion_properties import NotionPropertyMapper
from token_sync.reconciliation import build_store_index, reconcile


@pytest.fixture
def tokens(make_token):
    return [
        make_token(name="Sys/outline/error", value="#ed7d70"),
        make_token(name="Size/2xs", collection="Font", value="12"),
        make_token(name="Letter spacing/base", collection="Font", value="0"),
    ]


class TestReconcile:

    @pytest.mark.asyncio
    async def test_creates_unknown_tokens(self, tokens, fake_store):
        result = await reconcile(tokens, {}, fake_store)

        assert result.created == 3
        assert result.updated == 0
        assert result.total == 3
        assert len(fake_store.created) == 3

    @pytest.mark.asyncio
    async def test_updates_known_tokens(self, tokens, fake_store):
        index = {tokens[0].id: "page-42"}
        result = await reconcile(tokens, index, fake_store)

        assert result.created == 2
        assert result.updated == 1
        page_id, properties = fake_store.updated[0]
        assert page_id == "page-42"
        assert fake_store.figma_id_of(properties) == tokens[0].id

    @pytest.mark.asyncio
    async def test_second_run_only_updates(self, tokens, fake_store):
        first = await reconcile(tokens, await build_store_index(fake_store), fake_store)
        second = await reconcile(tokens, await build_store_index(fake_store), fake_store)

        assert (first.created, first.updated) == (3, 0)
        assert (second.created, second.updated, second.total) == (0, 3, 3)
        assert len(fake_store.pages) == 3

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_batch(self, tokens, fake_store):
        fake_store.fail_on = {tokens[1].id}

        result = await reconcile(tokens, {}, fake_store)

        assert result.total == 3
        assert result.created + result.updated == 2
        assert result.failed == 1
        # The token after the failing one was still attempted
        assert fake_store.calls[-1] == f"create:{tokens[2].id}"

    @pytest.mark.asyncio
    async def test_failing_update_is_not_counted(self, tokens, fake_store):
        fake_store.fail_on = {tokens[0].id}
        result = await reconcile(tokens, {tokens[0].id: "page-1"}, fake_store)

        assert result.updated == 0
        assert result.created == 2

    @pytest.mark.asyncio
    async def test_writes_are_sequential_in_input_order(self, tokens, fake_store):
        await reconcile(tokens, {tokens[1].id: "page-9"}, fake_store)

        assert fake_store.calls == [
            f"create:{tokens[0].id}",
            f"update:{tokens[1].id}",
            f"create:{tokens[2].id}",
        ]

    @pytest.mark.asyncio
    async def test_swatch_failure_is_contained(self, tokens, fake_store):
        class ExplodingSwatches:
            async def provision_swatch(self, hex_color, file_name):
                raise RuntimeError("host down")

        result = await reconcile(tokens, {}, fake_store, NotionPropertyMapper(ExplodingSwatches()))

        # The color token is still written, just without its Image
        assert result.created == 3
        assert all("Image" not in properties for properties in fake_store.created)
        assert result.total == 3

    @pytest.mark.asyncio
    async def test_empty_input(self, fake_store):
        result = await reconcile([], {}, fake_store)
        assert (result.created, result.updated, result.total) == (0, 0, 0)


class TestBuildStoreIndex:

    @pytest.mark.asyncio
    async def test_maps_figma_id_to_page(self, fake_store):
        fake_store.pages = {"p1": "var_a", "p2": "var_b"}

        index = await build_store_index(fake_store)

        assert index == {"var_a": "p1", "var_b": "p2"}

    @pytest.mark.asyncio
    async def test_last_duplicate_wins(self, fake_store):
        fake_store.pages = {"p1": "var_a", "p2": "var_a"}

        index = await build_store_index(fake_store)

        assert index == {"var_a": "p2"}

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        class BrokenStore:
            async def iter_figma_ids(self):
                raise RuntimeError("query failed")
                yield  # pragma: no cover

        with pytest.raises(RuntimeError):
            await build_store_index(BrokenStore())
