"""Tests for nested text_fields scopes."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchSpec.core.errors import SealedSpecError
from SearchSpec.core.spec import GeoRestriction, Pagination, QuerySpec, Restriction
from SearchSpec.dsl import ScopeDSL, build_query, compose_scope, open_scope
from SearchSpec.dsl import receiver as q


class TestTextFieldsScopes(unittest.TestCase):
    def test_scopes_at_different_depths_are_independent(self) -> None:
        def configure(dsl) -> None:
            dsl.keywords("pizza", fields=["name"])
            dsl.paginate(page=2, per_page=10)
            dsl.text_fields(lambda scope: scope.with_("menu", "calzone"))
            dsl.text_fields(lambda outer: outer.text_fields(lambda inner: inner.without("menu", "anchovies")))

        spec = build_query(configure)

        self.assertEqual(spec.fulltext.expression, "pizza")
        self.assertEqual(spec.pagination, Pagination(page=2, per_page=10))
        self.assertEqual(spec.restrictions, ())
        self.assertEqual(len(spec.scopes), 2)

        first, second = spec.scopes
        self.assertTrue(first.sealed)
        self.assertEqual(first.kind, "text_fields")
        self.assertEqual(first.restrictions, (Restriction("menu", "equal_to", "calzone"),))
        self.assertEqual(first.scopes, ())

        self.assertTrue(second.sealed)
        self.assertEqual(second.restrictions, ())
        self.assertEqual(len(second.scopes), 1)
        inner = second.scopes[0]
        self.assertTrue(inner.sealed)
        self.assertEqual(inner.restrictions, (Restriction("menu", "equal_to", "anchovies", negated=True),))
        self.assertIs(inner.parent, second)
        self.assertIs(second.parent, spec)
        self.assertEqual(inner.depth, 2)

    def test_scopes_keep_call_order(self) -> None:
        def configure() -> None:
            for name in ("a", "b", "c"):
                q.text_fields(lambda: q.with_(name, 1))

        spec = build_query(configure)
        self.assertEqual([scope.restrictions[0].field for scope in spec.scopes], ["a", "b", "c"])

    def test_scopes_inherit_default_fields_from_parent(self) -> None:
        def configure(dsl) -> None:
            dsl.text_fields(lambda scope: scope.text_fields(lambda inner: inner.with_("menu", "x")))
            dsl.keywords("pizza", fields=["name", "menu"])

        spec = build_query(configure)
        inner = spec.scopes[0].scopes[0]
        self.assertEqual(inner.default_fields(), ("name", "menu"))
        self.assertIsNone(inner.fulltext)
        self.assertEqual(spec.as_dict()["scopes"][0]["scopes"][0]["default_fields"], ["name", "menu"])

    def test_scope_geo_restriction_stays_on_scope(self) -> None:
        spec = build_query(lambda dsl: dsl.text_fields(lambda scope: scope.near((40.0, -75.0), 1)))
        self.assertIsNone(spec.geo)
        self.assertEqual(spec.scopes[0].geo.radius_miles, 1.0)

    def test_root_and_scope_geo_restrictions_are_kept_apart(self) -> None:
        def configure(dsl) -> None:
            dsl.near((40.0, -75.0), 5)
            dsl.text_fields(lambda scope: scope.near((41.0, -74.0), 1))
            dsl.text_fields(lambda scope: scope.with_("menu", "pizza"))

        spec = build_query(configure)
        self.assertEqual(spec.geo, GeoRestriction(latitude=40.0, longitude=-75.0, radius_miles=5.0))
        self.assertEqual(spec.scopes[0].geo, GeoRestriction(latitude=41.0, longitude=-74.0, radius_miles=1.0))
        self.assertIsNone(spec.scopes[1].geo)

    def test_failed_scope_is_not_attached(self) -> None:
        def broken(scope) -> None:
            scope.with_("menu", "calzone")
            raise RuntimeError("boom")

        def configure(dsl) -> None:
            try:
                dsl.text_fields(broken)
            except RuntimeError:
                pass
            dsl.text_fields(lambda scope: scope.with_("menu", "pie"))

        spec = build_query(configure)
        self.assertEqual(len(spec.scopes), 1)
        self.assertEqual(spec.scopes[0].restrictions[0].value, "pie")

    def test_scope_dsl_rejected_after_scope_returns(self) -> None:
        captured = []
        build_query(lambda dsl: dsl.text_fields(captured.append))
        with self.assertRaises(SealedSpecError):
            captured[0].with_("menu", "late")

    def test_compose_scope_on_plain_nodes(self) -> None:
        root = QuerySpec()
        child = compose_scope(root, "text_fields", lambda scope: scope.with_("a", 1))
        self.assertEqual(root.scopes, (child,))
        self.assertTrue(child.sealed)
        self.assertFalse(root.sealed)

    def test_unsealed_scope_cannot_be_attached(self) -> None:
        root = QuerySpec()
        child = open_scope(root, "text_fields")
        ScopeDSL(child).with_("a", 1)
        with self.assertRaises(ValueError):
            root.add_scope(child)
        with self.assertRaises(ValueError):
            QuerySpec().add_scope(child)

    def test_open_scope_on_sealed_parent(self) -> None:
        root = QuerySpec()
        root.seal()
        with self.assertRaises(SealedSpecError):
            open_scope(root, "text_fields")


if __name__ == "__main__":
    unittest.main()
