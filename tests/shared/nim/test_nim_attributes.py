"""
tests/shared/nim/test_nim_attributes.py - shared/nim/attributes.py 테스트
"""

import itertools
from functools import reduce

from shared.nim.attributes import SUPERFLUOUS_ATTRIBUTES, deep_merge, purge_superfluous_attributes, sort_by_name


class TestPurgeSuperfluousAttributes:
    """purge_superfluous_attributes 테스트"""

    def test_removes_listed_keys(self):
        """class/type/arch/prev_state/simages/bos_license/name 제거"""
        attributes = {
            "class": "resources",
            "type": "lpp_source",
            "arch": "power",
            "prev_state": "unavailable",
            "simages": "yes",
            "bos_license": "yes",
            "name": "lpp7200",
            "Rstate": "ready for use",
            "location": "/export/lpp7200",
        }

        assert purge_superfluous_attributes(attributes) == {
            "Rstate": "ready for use",
            "location": "/export/lpp7200",
        }

    def test_idempotent(self):
        attributes = {"class": "machines", "platform": "chrp"}
        once = purge_superfluous_attributes(attributes)

        assert purge_superfluous_attributes(once) == once

    def test_absent_keys_no_error(self):
        assert purge_superfluous_attributes({"Cstate": "ready"}) == {"Cstate": "ready"}

    def test_does_not_mutate_input(self):
        attributes = {"class": "machines"}
        purge_superfluous_attributes(attributes)

        assert attributes == {"class": "machines"}

    def test_superfluous_set(self):
        assert set(SUPERFLUOUS_ATTRIBUTES) == {"class", "type", "arch", "prev_state", "simages", "bos_license", "name"}


class TestDeepMerge:
    """deep_merge 테스트"""

    def test_disjoint_keys(self):
        assert deep_merge({"client1": {"a": 1}}, {"client2": {"b": 2}}) == {
            "client1": {"a": 1},
            "client2": {"b": 2},
        }

    def test_nested_mappings_merged(self):
        first = {"client1": {"name": "client1", "lsnim": {"Cstate": "ready"}}}
        second = {"client1": {"oslevel": "7200", "lsnim": {"Mstate": "running"}}}

        assert deep_merge(first, second) == {
            "client1": {"name": "client1", "oslevel": "7200", "lsnim": {"Cstate": "ready", "Mstate": "running"}}
        }

    def test_second_wins_for_scalars_and_lists(self):
        assert deep_merge({"hosts": ["a"], "name": "x"}, {"hosts": ["b"], "name": "y"}) == {"hosts": ["b"], "name": "y"}

    def test_inputs_not_mutated(self):
        first = {"client1": {"a": 1}}
        second = {"client1": {"b": 2}}

        deep_merge(first, second)

        assert first == {"client1": {"a": 1}}
        assert second == {"client1": {"b": 2}}

    def test_arrival_order_does_not_matter(self):
        """단일 호스트 결과를 어떤 순서로 병합해도 같은 문서"""
        partials = [
            {"client1": {"name": "client1", "oslevel": "7200-05-03-2148"}},
            {"client2": {"name": "client2", "routes": ["default:0:10.0.0.254"]}},
            {"client3": {"name": "client3", "lsnim": {"Cstate": "ready for a NIM operation"}}},
        ]

        merged = [sort_by_name(reduce(deep_merge, order, {})) for order in itertools.permutations(partials)]

        assert all(m == merged[0] for m in merged)
        assert all(list(m) == ["client1", "client2", "client3"] for m in merged)


class TestSortByName:
    """sort_by_name 테스트"""

    def test_sorted_keys(self):
        result = sort_by_name({"client2": 2, "client10": 10, "client1": 1})

        assert list(result) == ["client1", "client10", "client2"]

    def test_empty(self):
        assert sort_by_name({}) == {}
