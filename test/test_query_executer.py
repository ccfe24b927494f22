"""Tests for query parameter building and the random ordering round trips."""

from __future__ import annotations

import sys
import unittest
from dataclasses import dataclass
from pathlib import Path
from unittest.mock import Mock, call

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SolrClient.core.mapping import solr_field, unique_key_of
from SolrClient.core.options import (
    MAX_ROWS,
    RANDOM,
    FacetFieldQuery,
    FacetQuery,
    HighlightingParameters,
    Order,
    QueryOptions,
    SortOrder,
)
from SolrClient.core.query import SolrQuery, SolrQueryByRange
from SolrClient.core.results import SolrQueryResults
from SolrClient.errors import MissingUniqueKeyError, SolrConnectionError, SolrParseError
from SolrClient.services.executer import SolrQueryExecuter
from SolrClient.services.randomizer import ShuffleListRandomizer

QUERY = "id:123456"


@dataclass
class _Document:
    id: int = solr_field(unique_key=True)
    name: str = ""


def _make_executer(**kwargs) -> tuple[SolrQueryExecuter, Mock, Mock]:
    conn = Mock()
    conn.get.return_value = ""
    parser = Mock()
    parser.parse.return_value = SolrQueryResults()
    executer = SolrQueryExecuter(connection=conn, parser=parser, **kwargs)
    return executer, conn, parser


class TestExecute(unittest.TestCase):
    def test_no_options_sends_query_and_default_rows(self) -> None:
        executer, conn, parser = _make_executer()
        expected = SolrQueryResults([_Document(id=1)], num_found=1)
        conn.get.return_value = "<response/>"
        parser.parse.return_value = expected

        result = executer.execute(SolrQuery(QUERY), None)

        conn.get.assert_called_once_with("/select", {"q": QUERY, "rows": str(executer.default_rows)})
        parser.parse.assert_called_once_with("<response/>")
        self.assertIs(result, expected)

    def test_plain_string_query_is_accepted(self) -> None:
        executer, conn, _ = _make_executer(default_rows=10)
        executer.execute(QUERY)
        conn.get.assert_called_once_with("/select", {"q": QUERY, "rows": "10"})

    def test_empty_query_string(self) -> None:
        executer, _, _ = _make_executer(default_rows=10)
        self.assertEqual(executer.build_parameters(SolrQuery("")), {"q": "", "rows": "10"})

    def test_custom_handler(self) -> None:
        executer, conn, _ = _make_executer(handler="/browse")
        executer.execute(SolrQuery(QUERY))
        self.assertEqual(conn.get.call_args.args[0], "/browse")

    def test_connection_error_propagates(self) -> None:
        executer, conn, parser = _make_executer()
        conn.get.side_effect = SolrConnectionError("down")
        with self.assertRaises(SolrConnectionError):
            executer.execute(SolrQuery(QUERY))
        parser.parse.assert_not_called()
        conn.get.assert_called_once()

    def test_parse_error_propagates(self) -> None:
        executer, _, parser = _make_executer()
        parser.parse.side_effect = SolrParseError("bad xml")
        with self.assertRaises(SolrParseError):
            executer.execute(SolrQuery(QUERY))


class TestBuildParameters(unittest.TestCase):
    def setUp(self) -> None:
        self.executer, _, _ = _make_executer()
        self.rows = str(self.executer.default_rows)

    def test_rows_option_overrides_default(self) -> None:
        params = self.executer.build_parameters(SolrQuery(QUERY), QueryOptions(rows=5))
        self.assertEqual(params, {"q": QUERY, "rows": "5"})

    def test_start(self) -> None:
        params = self.executer.build_parameters(SolrQuery(QUERY), QueryOptions(start=20))
        self.assertEqual(params["start"], "20")

    def test_sort_defaults_to_ascending(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(QUERY),
            QueryOptions(order_by=[SortOrder("id")]),
        )
        self.assertEqual(params, {"q": QUERY, "rows": self.rows, "sort": "id asc"})

    def test_sort_multiple_with_orders(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(QUERY),
            QueryOptions(order_by=[SortOrder("id", Order.ASC), SortOrder("name", Order.DESC)]),
        )
        self.assertEqual(params, {"q": QUERY, "rows": self.rows, "sort": "id asc,name desc"})

    def test_result_fields(self) -> None:
        params = self.executer.build_parameters(SolrQuery(QUERY), QueryOptions(fields=["id", "name"]))
        self.assertEqual(params, {"q": QUERY, "rows": self.rows, "fl": "id,name"})

    def test_facets(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(""),
            QueryOptions(
                facet_queries=[
                    FacetFieldQuery("Id"),
                    FacetQuery(SolrQuery("id:[1 TO 5]")),
                ]
            ),
        )
        self.assertEqual(
            params,
            {
                "q": "",
                "rows": self.rows,
                "facet": "true",
                "facet.field": "Id",
                "facet.query": "id:[1 TO 5]",
            },
        )

    def test_repeated_facet_fields_are_accumulated(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(""),
            QueryOptions(
                facet_queries=[
                    FacetFieldQuery("cat"),
                    FacetFieldQuery("manu"),
                    FacetQuery(SolrQueryByRange("price", 0, 10)),
                    FacetQuery("popularity:[5 TO *]"),
                ]
            ),
        )
        self.assertEqual(params["facet"], "true")
        self.assertEqual(params["facet.field"], ["cat", "manu"])
        self.assertEqual(params["facet.query"], ["price:[0 TO 10]", "popularity:[5 TO *]"])

    def test_facet_field_overrides(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(""),
            QueryOptions(facet_queries=[FacetFieldQuery("cat", prefix="el", limit=5, min_count=1, missing=True)]),
        )
        self.assertEqual(params["f.cat.facet.prefix"], "el")
        self.assertEqual(params["f.cat.facet.limit"], "5")
        self.assertEqual(params["f.cat.facet.mincount"], "1")
        self.assertEqual(params["f.cat.facet.missing"], "true")
        self.assertNotIn("f.cat.facet.sort", params)

    def test_highlighting(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(""),
            QueryOptions(
                highlight=HighlightingParameters(
                    fields=["field1"],
                    after_term="after",
                    before_term="before",
                )
            ),
        )
        self.assertEqual(
            params,
            {
                "q": "",
                "rows": self.rows,
                "hl": "true",
                "hl.fl": "field1",
                "hl.simple.pre": "before",
                "hl.simple.post": "after",
            },
        )

    def test_highlighting_snippets_and_fragsize(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(""),
            QueryOptions(highlight=HighlightingParameters(fields=["a", "b"], snippets=3, fragsize=50)),
        )
        self.assertEqual(params["hl.fl"], "a,b")
        self.assertEqual(params["hl.snippets"], "3")
        self.assertEqual(params["hl.fragsize"], "50")
        self.assertNotIn("hl.simple.pre", params)
        self.assertNotIn("hl.simple.post", params)

    def test_filter_queries(self) -> None:
        params = self.executer.build_parameters(
            SolrQuery(QUERY),
            QueryOptions(filter_queries=[SolrQuery("inStock:true")]),
        )
        self.assertEqual(params["fq"], "inStock:true")

        params = self.executer.build_parameters(
            SolrQuery(QUERY),
            QueryOptions(filter_queries=[SolrQuery("inStock:true"), "cat:book"]),
        )
        self.assertEqual(params["fq"], ["inStock:true", "cat:book"])

    def test_random_order_adds_no_sort(self) -> None:
        params = self.executer.build_parameters(SolrQuery(QUERY), QueryOptions(order_by=RANDOM))
        self.assertNotIn("sort", params)


class TestRandomOrder(unittest.TestCase):
    def _reverse(self, items: list) -> None:
        items.reverse()

    def test_two_round_trips_with_shuffled_ids(self) -> None:
        randomizer = Mock()
        randomizer.randomize.side_effect = self._reverse
        executer, conn, parser = _make_executer(
            randomizer=randomizer,
            unique_key=unique_key_of(_Document),
        )
        doc123, doc456, doc567 = _Document(id=123), _Document(id=456), _Document(id=567)
        conn.get.side_effect = ["ids", "docs"]
        parser.parse.side_effect = [
            SolrQueryResults([doc123, doc456, doc567], num_found=3),
            SolrQueryResults([doc456, doc567], num_found=2),
        ]

        result = executer.execute(SolrQuery(QUERY), QueryOptions(order_by=RANDOM, rows=2))

        self.assertEqual(
            conn.get.call_args_list,
            [
                call("/select", {"q": QUERY, "rows": str(MAX_ROWS), "fl": "id"}),
                call("/select", {"q": "(id:567 OR id:456)", "rows": "2"}),
            ],
        )
        randomizer.randomize.assert_called_once()
        self.assertEqual(parser.parse.call_args_list, [call("ids"), call("docs")])
        self.assertEqual([d.id for d in result], [567, 456])
        self.assertEqual(result.num_found, 2)

    def test_second_request_keeps_other_options(self) -> None:
        randomizer = Mock()
        executer, conn, parser = _make_executer(randomizer=randomizer, unique_key="id", default_rows=10)
        conn.get.side_effect = ["ids", "docs"]
        parser.parse.side_effect = [
            SolrQueryResults([{"id": "a"}, {"id": "b"}]),
            SolrQueryResults([{"id": "a", "name": "x"}, {"id": "b", "name": "y"}]),
        ]

        executer.execute(
            SolrQuery(QUERY),
            QueryOptions(
                order_by=RANDOM,
                start=5,
                fields=["id", "name"],
                filter_queries=["inStock:true"],
                facet_queries=[FacetFieldQuery("cat")],
            ),
        )

        first, second = conn.get.call_args_list
        self.assertEqual(
            first.args[1],
            {"q": QUERY, "rows": str(MAX_ROWS), "fl": "id", "fq": "inStock:true"},
        )
        self.assertEqual(
            second.args[1],
            {
                "q": "(id:a OR id:b)",
                "rows": "2",
                "fl": "id,name",
                "facet": "true",
                "facet.field": "cat",
            },
        )

    def test_fields_without_unique_key_keep_shuffled_order(self) -> None:
        randomizer = Mock()
        randomizer.randomize.side_effect = self._reverse
        executer, conn, parser = _make_executer(randomizer=randomizer, unique_key="id")
        conn.get.side_effect = ["ids", "docs"]
        parser.parse.side_effect = [
            SolrQueryResults([{"id": "a"}, {"id": "b"}, {"id": "c"}]),
            SolrQueryResults(
                [
                    {"id": "a", "name": "A"},
                    {"id": "b", "name": "B"},
                    {"id": "c", "name": "C"},
                ]
            ),
        ]

        result = executer.execute(SolrQuery(QUERY), QueryOptions(order_by=RANDOM, rows=3, fields=["name"]))

        second = conn.get.call_args_list[1]
        self.assertEqual(second.args[1]["fl"], "name,id")
        self.assertEqual([doc["name"] for doc in result], ["C", "B", "A"])

    def test_no_candidates_skips_second_request(self) -> None:
        executer, conn, parser = _make_executer(unique_key="id")
        parser.parse.return_value = SolrQueryResults()

        result = executer.execute(SolrQuery(QUERY), QueryOptions(order_by=RANDOM))

        conn.get.assert_called_once()
        self.assertEqual(list(result), [])
        self.assertEqual(result.num_found, 0)

    def test_missing_unique_key_raises(self) -> None:
        executer, conn, _ = _make_executer()
        with self.assertRaises(MissingUniqueKeyError):
            executer.execute(SolrQuery(QUERY), QueryOptions(order_by=RANDOM))
        conn.get.assert_not_called()


class TestShuffleListRandomizer(unittest.TestCase):
    def test_shuffles_in_place(self) -> None:
        items = list(range(20))
        ShuffleListRandomizer(seed=7).randomize(items)
        self.assertEqual(sorted(items), list(range(20)))
        self.assertNotEqual(items, list(range(20)))

    def test_seed_is_reproducible(self) -> None:
        left, right = list(range(10)), list(range(10))
        ShuffleListRandomizer(seed=3).randomize(left)
        ShuffleListRandomizer(seed=3).randomize(right)
        self.assertEqual(left, right)


if __name__ == "__main__":
    unittest.main()
