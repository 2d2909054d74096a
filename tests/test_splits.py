"""Tests for core expense split logic."""

import pytest

from huddle.core.splits import (
    ExpenseSplit,
    SplitError,
    SplitParticipant,
    add_participant,
    allocated_total,
    coerce_amount,
    create_split,
    even_share,
    is_balanced,
    recompute,
    remove_participant,
    reset_split,
    set_amount,
    set_share,
    unallocated,
)


@pytest.fixture
def alice():
    return SplitParticipant(id="u1", name="Alice")


@pytest.fixture
def bob():
    return SplitParticipant(id="u2", name="Bob")


@pytest.fixture
def carol():
    return SplitParticipant.custom("Carol")


@pytest.fixture
def split(alice, bob):
    return create_split(100, [alice, bob])


class TestSplitParticipant:
    def test_key_uses_id_and_name(self, alice):
        assert alice.key == ("u1", "Alice")

    def test_custom_participant(self, carol):
        assert carol.id is None
        assert carol.is_custom is True
        assert carol.key == (None, "Carol")

    def test_same_name_different_ids_are_distinct(self):
        assert SplitParticipant("a", "Sam").key != SplitParticipant("b", "Sam").key

    def test_separator_characters_do_not_collide(self):
        assert SplitParticipant("a:b", "c").key != SplitParticipant("a", "b:c").key

    def test_registered_user_and_guest_with_same_name(self):
        member = SplitParticipant(id="custom", name="Carol")
        guest = SplitParticipant.custom("Carol")

        result = create_split(100, [member, guest])

        assert result.share_for(member.key) == 50
        assert result.share_for(guest.key) == 50
        manual = set_share(result, guest.key, 10)
        assert manual.share_for(member.key) == 50
        assert manual.share_for(guest.key) == 10


class TestCoerceAmount:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (10, 10.0),
            ("12.5", 12.5),
            ("abc", 0.0),
            ("", 0.0),
            (None, 0.0),
            ("nan", 0.0),
            ("inf", 0.0),
        ],
    )
    def test_coercion(self, value, expected):
        assert coerce_amount(value) == expected


class TestEvenShare:
    def test_divides_amount(self):
        assert even_share(90, 3) == 30

    def test_zero_participants(self):
        assert even_share(100, 0) == 0.0

    def test_negative_count_raises(self):
        with pytest.raises(SplitError):
            even_share(100, -1)


class TestCreateSplit:
    def test_even_split_two(self, split, alice, bob):
        assert split.shares == {alice.key: 50.0, bob.key: 50.0}
        assert split.manual is False

    def test_each_share_is_total_over_n(self):
        people = [SplitParticipant(str(i), f"P{i}") for i in range(7)]
        result = create_split(250, people)
        for p in people:
            assert result.share_for(p.key) == pytest.approx(250 / 7)
        assert is_balanced(result)

    def test_no_participants(self):
        result = create_split(100)
        assert result.shares == {}
        assert unallocated(result) == 100

    def test_non_numeric_amount(self, alice):
        result = create_split("lots", [alice])
        assert result.amount == 0.0
        assert result.share_for(alice.key) == 0.0

    def test_duplicate_participants_rejected(self, alice):
        with pytest.raises(SplitError):
            create_split(100, [alice, alice])


class TestAddRemove:
    def test_add_resplits_evenly(self, split, alice, bob, carol):
        result = add_participant(split, carol)
        for p in (alice, bob, carol):
            assert result.share_for(p.key) == pytest.approx(33.333333)

    def test_add_duplicate_raises(self, split, alice):
        with pytest.raises(SplitError, match="already part"):
            add_participant(split, alice)

    def test_add_in_manual_mode_keeps_shares(self, split, alice, bob, carol):
        manual = set_share(split, alice.key, 70)
        result = add_participant(manual, carol)
        assert result.manual is True
        assert result.share_for(alice.key) == 70
        assert result.share_for(bob.key) == 50
        assert result.share_for(carol.key) == 0.0

    def test_remove_resplits_evenly(self, split, alice, bob, carol):
        three = add_participant(split, carol)
        result = remove_participant(three, carol.key)
        assert result.shares == {alice.key: 50.0, bob.key: 50.0}

    def test_remove_then_readd_returns_to_even(self, split, alice, bob):
        removed = remove_participant(split, bob.key)
        assert removed.share_for(alice.key) == 100
        readded = add_participant(removed, bob)
        assert readded.shares == split.shares

    def test_remove_unknown_raises(self, split):
        with pytest.raises(SplitError, match="Unknown participant"):
            remove_participant(split, (None, "Nobody"))

    def test_remove_in_manual_mode_keeps_other_shares(self, split, alice, bob, carol):
        manual = set_share(add_participant(split, carol), alice.key, 60)
        result = remove_participant(manual, carol.key)
        assert result.manual is True
        assert result.shares == {alice.key: 60.0, bob.key: pytest.approx(33.333333)}

    def test_removing_last_participant_returns_to_auto(self, alice):
        manual = set_share(create_split(10, [alice]), alice.key, 4)
        result = remove_participant(manual, alice.key)
        assert result.manual is False
        assert result.participants == ()


class TestManualOverride:
    def test_example_flow(self, split, alice, bob, carol):
        """100 across A, B; add C; set A to 60 - B and C keep their shares."""
        assert split.shares == {alice.key: 50.0, bob.key: 50.0}

        three = add_participant(split, carol)
        assert round(three.share_for(alice.key), 2) == 33.33

        result = set_share(three, alice.key, 60)
        assert result.manual is True
        assert result.share_for(alice.key) == 60
        assert result.share_for(bob.key) == three.share_for(bob.key)
        assert result.share_for(carol.key) == three.share_for(carol.key)

    def test_non_numeric_share_is_zero(self, split, alice):
        result = set_share(split, alice.key, "sixty")
        assert result.share_for(alice.key) == 0.0

    def test_set_share_unknown_raises(self, split):
        with pytest.raises(SplitError):
            set_share(split, (None, "Nobody"), 10)

    def test_original_is_unchanged(self, split, alice):
        set_share(split, alice.key, 99)
        assert split.share_for(alice.key) == 50
        assert split.manual is False

    def test_override_to_even_value_stays_manual(self, split, alice):
        result = set_share(split, alice.key, 50)
        assert result.manual is True
        assert set_amount(result, 200).share_for(alice.key) == 50


class TestAmountAndReset:
    def test_set_amount_resplits_in_auto(self, split, alice):
        assert set_amount(split, 300).share_for(alice.key) == 150

    def test_set_amount_keeps_manual_shares(self, split, alice, bob):
        manual = set_share(split, alice.key, 80)
        result = set_amount(manual, 300)
        assert result.amount == 300
        assert result.share_for(alice.key) == 80
        assert result.share_for(bob.key) == 50

    def test_reset_returns_to_even(self, split, alice, bob):
        manual = set_share(split, alice.key, 80)
        result = reset_split(manual)
        assert result.manual is False
        assert result.shares == {alice.key: 50.0, bob.key: 50.0}

    def test_recompute_is_identity_in_manual(self, split, alice):
        manual = set_share(split, alice.key, 80)
        assert recompute(manual) is manual


class TestTotals:
    def test_allocated_and_unallocated(self, split, alice):
        manual = set_share(split, alice.key, 30)
        assert allocated_total(manual) == 80
        assert unallocated(manual) == 20
        assert is_balanced(manual) is False

    def test_over_allocation_is_negative(self, split, alice):
        manual = set_share(split, alice.key, 70)
        assert unallocated(manual) == -20

    def test_to_dict(self, split):
        data = split.to_dict()
        assert data["amount"] == 100
        assert data["manual"] is False
        assert [s["name"] for s in data["shares"]] == ["Alice", "Bob"]
        assert data["unallocated"] == 0

    def test_frozen(self, split):
        with pytest.raises(AttributeError):
            split.amount = 5  # type: ignore[misc]

    def test_shares_are_read_only(self, split, alice):
        with pytest.raises(TypeError):
            split.shares[alice.key] = 1.0  # type: ignore[index]

    def test_hashable(self, split):
        assert hash(split) == hash(create_split(100, split.participants))

    def test_manual_copies_do_not_share_state(self, split, alice):
        manual = set_share(split, alice.key, 80)
        for derived in (set_amount(manual, 300), reset_split(manual)):
            assert derived.shares is not manual.shares
        assert manual.share_for(alice.key) == 80

    def test_caller_mapping_is_copied(self, alice):
        shares = {alice.key: 5.0}
        result = ExpenseSplit(amount=5, participants=(alice,), shares=shares, manual=True)
        shares[alice.key] = 99.0
        assert result.share_for(alice.key) == 5.0

    def test_participant_lookup(self, split, bob):
        assert split.participant(bob.key) == bob
        assert isinstance(split, ExpenseSplit)
