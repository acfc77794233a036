"""
Unit tests for circular fund routing detection.
"""
from forensics.cycle_detector import detect_cycles
from forensics.graph_builder import build_graph


def _ring(txn, accounts):
    return [txn(a, accounts[(i + 1) % len(accounts)]) for i, a in enumerate(accounts)]


class TestDetectCycles:
    """Tests for detect_cycles."""

    def test_triangle(self, cycle_transactions):
        """A 3-cycle tags every member cycle_length_3."""
        result = detect_cycles(build_graph(cycle_transactions))

        assert result.cycle_accounts == {"A", "B", "C"}
        assert len(result.cycles) == 1
        assert sorted(result.cycles[0]) == ["A", "B", "C"]
        for acc in "ABC":
            assert result.account_patterns[acc] == {"cycle_length_3"}

    def test_two_node_loop_ignored(self, txn):
        """Round trips between two accounts are below the minimum length."""
        result = detect_cycles(build_graph([txn("A", "B"), txn("B", "A")]))

        assert result.cycles == []
        assert result.account_patterns == {}

    def test_five_cycle_detected(self, txn):
        result = detect_cycles(build_graph(_ring(txn, ["A", "B", "C", "D", "E"])))

        assert len(result.cycles) == 1
        assert result.account_patterns["C"] == {"cycle_length_5"}

    def test_six_cycle_out_of_bounds(self, txn):
        """Loops longer than five hops are not searched."""
        result = detect_cycles(build_graph(_ring(txn, ["A", "B", "C", "D", "E", "F"])))

        assert result.cycles == []
        assert result.cycle_accounts == set()

    def test_custom_bounds(self, txn):
        result = detect_cycles(
            build_graph(_ring(txn, ["A", "B", "C", "D", "E", "F"])), max_length=6
        )

        assert result.account_patterns["F"] == {"cycle_length_6"}

    def test_same_member_set_counted_once(self, txn):
        """Different edge sequences over the same accounts are one cycle."""
        txns = [
            txn("A", "B"), txn("B", "C"), txn("C", "D"), txn("D", "A"),
            txn("A", "C"), txn("C", "B"), txn("B", "D"),
        ]
        result = detect_cycles(build_graph(txns))

        keys = ["|".join(sorted(c)) for c in result.cycles]
        assert len(keys) == len(set(keys))
        assert keys.count("A|B|C|D") == 1
        # A→B→D→A and A→C→D→A are distinct member sets
        assert "A|B|D" in keys
        assert "A|C|D" in keys

    def test_account_in_two_cycle_lengths(self, txn):
        """An account shared by a 3-cycle and a 4-cycle carries both tags."""
        txns = _ring(txn, ["A", "B", "C"]) + _ring(txn, ["A", "D", "E", "F"])
        result = detect_cycles(build_graph(txns))

        assert result.account_patterns["A"] == {"cycle_length_3", "cycle_length_4"}
        assert result.account_patterns["B"] == {"cycle_length_3"}
        assert result.account_patterns["E"] == {"cycle_length_4"}
        assert len(result.cycles) == 2

    def test_parallel_transfers_do_not_duplicate(self, txn):
        txns = _ring(txn, ["A", "B", "C"]) + _ring(txn, ["A", "B", "C"])
        result = detect_cycles(build_graph(txns))

        assert len(result.cycles) == 1

    def test_acyclic_graph(self, txn):
        result = detect_cycles(build_graph([txn("A", "B"), txn("B", "C"), txn("A", "C")]))

        assert result.cycles == []

    def test_empty_graph(self):
        result = detect_cycles(build_graph([]))

        assert result.cycles == []
        assert result.cycle_accounts == set()
        assert result.account_patterns == {}

    def test_input_order_does_not_change_membership(self, txn):
        """Reordering transactions yields the same cycles and tags."""
        txns = [
            txn("A", "B"), txn("B", "C"), txn("C", "D"), txn("D", "A"),
            txn("A", "C"), txn("C", "B"), txn("B", "D"),
        ]
        first = detect_cycles(build_graph(txns))
        second = detect_cycles(build_graph(list(reversed(txns))))

        assert sorted(tuple(sorted(c)) for c in first.cycles) == \
            sorted(tuple(sorted(c)) for c in second.cycles)
        assert first.account_patterns == second.account_patterns

    def test_self_transfer_ignored(self, txn):
        result = detect_cycles(build_graph([txn("A", "A"), txn("A", "B")]))

        assert result.cycles == []

    def test_min_length_override(self, cycle_transactions):
        result = detect_cycles(build_graph(cycle_transactions), min_length=4)

        assert result.cycles == []
        assert result.account_patterns == {}

    def test_complete_graph_one_cycle_per_member_set(self, txn):
        """Six fully connected accounts give every 3-, 4- and 5-account subset once."""
        accounts = ["A", "B", "C", "D", "E", "F"]
        txns = [txn(a, b) for a in accounts for b in accounts if a != b]

        result = detect_cycles(build_graph(txns))

        keys = {"|".join(sorted(c)) for c in result.cycles}
        assert len(result.cycles) == len(keys) == 20 + 15 + 6
        assert all(3 <= len(c) <= 5 for c in result.cycles)
        for acc in accounts:
            assert result.account_patterns[acc] == {
                "cycle_length_3", "cycle_length_4", "cycle_length_5",
            }
