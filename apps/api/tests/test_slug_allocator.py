"""Slug normalization, suffix allocation and write-race tests."""

from __future__ import annotations

import threading
import unittest

from app.domain.slugs import SlugAllocator, normalize, slug_scope_for
from app.errors import SlugAllocationExhausted, SlugConflictError
from app.repositories.memory import InMemoryStore
from app.schemas.post import PostStatus


def _fake_exists(taken: dict[tuple[str | None, str], str]):
    def slug_exists(slug: str, scope: str | None, exclude_id: str | None) -> bool:
        owner = taken.get((scope, slug))
        return owner is not None and owner != exclude_id

    return slug_exists


def _insert(store: InMemoryStore, *, slug: str, scope: str | None = None, tenant_id: str = "hotel-a"):
    return store.insert_post(
        title=slug,
        slug=slug,
        slug_scope=scope,
        content="",
        excerpt="",
        meta_description="",
        keywords="",
        featured_image=None,
        status=PostStatus.DRAFT,
        author_id="author-1",
        tenant_id=tenant_id,
    )


class NormalizeTests(unittest.TestCase):
    def test_examples(self) -> None:
        cases = {
            "Café com Leite!": "cafe-com-leite",
            "###": "post",
            "": "post",
            "  Roteiro   Praia  ": "roteiro-praia",
            "São João -- 2024 / Festa": "sao-joao-2024-festa",
            "Pousada Açaí & Maçã": "pousada-acai-maca",
            "--already-slugged--": "already-slugged",
        }
        for title, expected in cases.items():
            with self.subTest(title=title):
                self.assertEqual(normalize(title), expected)

    def test_non_latin_only_title_falls_back(self) -> None:
        self.assertEqual(normalize("東京"), "post")


class AllocateTests(unittest.TestCase):
    def test_free_candidate_is_returned_verbatim(self) -> None:
        allocator = SlugAllocator(_fake_exists({}))
        self.assertEqual(allocator.allocate("roteiro-praia", None), "roteiro-praia")

    def test_smallest_free_suffix_is_used(self) -> None:
        taken = {(None, "roteiro-praia"): "p1", (None, "roteiro-praia-1"): "p2"}
        allocator = SlugAllocator(_fake_exists(taken))

        self.assertEqual(allocator.allocate("roteiro-praia", None), "roteiro-praia-2")

    def test_gaps_are_filled_sequentially_from_one(self) -> None:
        taken = {(None, "spa"): "p1", (None, "spa-2"): "p2"}
        allocator = SlugAllocator(_fake_exists(taken))

        self.assertEqual(allocator.allocate("spa", None), "spa-1")

    def test_scopes_are_independent(self) -> None:
        taken = {("hotel-a", "spa"): "p1"}
        allocator = SlugAllocator(_fake_exists(taken))

        self.assertEqual(allocator.allocate("spa", "hotel-a"), "spa-1")
        self.assertEqual(allocator.allocate("spa", "hotel-b"), "spa")
        self.assertEqual(allocator.allocate("spa", None), "spa")

    def test_exclude_id_ignores_own_row(self) -> None:
        taken = {(None, "roteiro-praia"): "post-1"}
        allocator = SlugAllocator(_fake_exists(taken))

        self.assertEqual(allocator.allocate("roteiro-praia", None, exclude_id="post-1"), "roteiro-praia")
        self.assertEqual(allocator.allocate("roteiro-praia", None, exclude_id="post-2"), "roteiro-praia-1")

    def test_exhausted_suffix_search_fails_loudly(self) -> None:
        allocator = SlugAllocator(lambda slug, scope, exclude_id: True, max_attempts=5)

        with self.assertRaises(SlugAllocationExhausted) as context:
            allocator.allocate("spa", None)
        self.assertEqual(context.exception.status_code, 500)
        self.assertEqual(context.exception.payload.code, "SLUG_ALLOCATION_EXHAUSTED")
        self.assertEqual(context.exception.payload.details, {"candidate": "spa", "attempts": 5})

    def test_empty_candidate_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            SlugAllocator(_fake_exists({})).allocate("", None)

    def test_slug_scope_for_modes(self) -> None:
        self.assertIsNone(slug_scope_for("hotel-a", "global"))
        self.assertEqual(slug_scope_for("hotel-a", "tenant"), "hotel-a")


class AllocateAndWriteTests(unittest.TestCase):
    def test_conflict_on_write_retries_with_next_suffix(self) -> None:
        writes: list[str] = []

        def write(slug: str) -> str:
            writes.append(slug)
            if slug == "spa":
                raise SlugConflictError(slug, None)
            return slug

        # The exists query never sees the competing row, so progress relies on the rejected set.
        allocator = SlugAllocator(_fake_exists({}))

        self.assertEqual(allocator.allocate_and_write("spa", None, write), "spa-1")
        self.assertEqual(writes, ["spa", "spa-1"])

    def test_conflict_retries_are_bounded(self) -> None:
        def write(slug: str) -> str:
            raise SlugConflictError(slug, None)

        allocator = SlugAllocator(_fake_exists({}), conflict_retries=2)

        with self.assertRaises(SlugAllocationExhausted) as context:
            allocator.allocate_and_write("spa", None, write)
        self.assertEqual(context.exception.payload.details, {"candidate": "spa", "attempts": 3})

    def test_other_write_errors_propagate(self) -> None:
        def write(slug: str) -> str:
            raise RuntimeError("storage down")

        allocator = SlugAllocator(_fake_exists({}))
        with self.assertRaises(RuntimeError):
            allocator.allocate_and_write("spa", None, write)


class StoreRaceTests(unittest.TestCase):
    def test_competing_writer_between_check_and_insert_causes_single_retry(self) -> None:
        store = InMemoryStore()
        allocator = SlugAllocator(store.slug_exists)
        competitor_ids: list[str] = []

        def competing_insert(scope: str | None, slug: str) -> None:
            competitor_ids.append(_insert(store, slug=slug, scope=scope).id)

        store.before_slug_write = competing_insert
        attempts: list[str] = []

        def write(slug: str):
            attempts.append(slug)
            return _insert(store, slug=slug)

        record = allocator.allocate_and_write("roteiro-praia", None, write)

        self.assertEqual(record.slug, "roteiro-praia-1")
        self.assertEqual(attempts, ["roteiro-praia", "roteiro-praia-1"])
        self.assertEqual(store.get_post(competitor_ids[0]).slug, "roteiro-praia")
        slugs = [post.slug for post in store.posts.values()]
        self.assertEqual(sorted(slugs), ["roteiro-praia", "roteiro-praia-1"])

    def test_concurrent_creations_yield_distinct_slugs(self) -> None:
        store = InMemoryStore()
        barrier = threading.Barrier(2, timeout=5)
        local = threading.local()

        def racing_exists(slug: str, scope: str | None, exclude_id: str | None) -> bool:
            exists = store.slug_exists(slug, scope, exclude_id)
            if not getattr(local, "synced", False):
                # Both threads observe the candidate as free before either writes.
                local.synced = True
                barrier.wait()
            return exists

        allocator = SlugAllocator(racing_exists)
        results: list[str] = []
        attempts: dict[str, int] = {}
        errors: list[BaseException] = []
        results_lock = threading.Lock()

        def create(name: str) -> None:
            count = 0

            def write(slug: str):
                nonlocal count
                count += 1
                return _insert(store, slug=slug)

            try:
                record = allocator.allocate_and_write("roteiro-praia", None, write)
            except BaseException as exc:  # surfaced below
                with results_lock:
                    errors.append(exc)
                return
            with results_lock:
                results.append(record.slug)
                attempts[name] = count

        threads = [threading.Thread(target=create, args=(name,)) for name in ("a", "b")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        self.assertEqual(errors, [])
        self.assertEqual(sorted(results), ["roteiro-praia", "roteiro-praia-1"])
        self.assertEqual(sorted(attempts.values()), [1, 2])
        self.assertEqual(len(store.slug_index), 2)

    def test_store_rejects_duplicate_slug_in_scope_without_side_effects(self) -> None:
        store = InMemoryStore()
        first = _insert(store, slug="spa")
        second = _insert(store, slug="spa-1")
        writes_before = store.post_write_count

        with self.assertRaises(SlugConflictError):
            _insert(store, slug="spa")
        with self.assertRaises(SlugConflictError):
            store.update_post(
                second,
                title="Spa",
                slug="spa",
                content="",
                excerpt="",
                meta_description="",
                keywords="",
                featured_image=None,
                status=PostStatus.DRAFT,
            )

        self.assertEqual(store.post_write_count, writes_before)
        self.assertEqual(second.slug, "spa-1")
        self.assertEqual(store.slug_index[(None, "spa")], first.id)
        self.assertEqual(len(store.posts), 2)
        # Same slug in another scope is a different index entry.
        self.assertEqual(_insert(store, slug="spa", scope="hotel-b").slug, "spa")
