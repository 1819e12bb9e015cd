"""
Tests for the balance service.
"""
from splitledger.schemas.expense import Expense
from splitledger.schemas.member import Participant
from splitledger.services.allocation_service import parse_expense_payload
from splitledger.services.balance_service import compute_balances, is_settled


def nets(balances):
    return {b.membership_id: b.net_cents for b in balances}


def test_simple_case(members, make_expense):
    """Test one expense split between two of three members."""
    expenses = [make_expense([("member1", 100)], [("member1", 50), ("member2", 50)])]

    balances = compute_balances(expenses, members)

    assert len(balances) == 3
    assert nets(balances) == {"member1": 50, "member2": -50, "member3": 0}
    alice = balances[0]
    assert (alice.paid_cents, alice.owed_cents) == (100, 50)
    assert alice.member.name == "Alice"


def test_multiple_expenses(members, make_expense):
    """Test balances accumulating across expenses."""
    expenses = [
        make_expense([("member1", 100)], [("member1", 50), ("member2", 50)]),
        make_expense([("member2", 60)], [("member2", 30), ("member3", 30)]),
    ]

    assert nets(compute_balances(expenses, members)) == {"member1": 50, "member2": -20, "member3": -30}


def test_zero_balance(members, make_expense):
    """Test a member paying for only themselves."""
    expenses = [make_expense([("member1", 100)], [("member1", 100)])]
    balances = compute_balances(expenses, members)
    assert balances[0].net_cents == 0
    assert balances[0].paid_cents == 100


def test_no_expenses(members):
    """Test that every member appears at zero without activity."""
    balances = compute_balances([], members)
    assert [b.membership_id for b in balances] == ["member1", "member2", "member3"]
    assert all(b.paid_cents == b.owed_cents == b.net_cents == 0 for b in balances)


def test_no_members(make_expense):
    """Test an empty roster."""
    assert compute_balances([make_expense([("member1", 100)], [("member1", 100)])], []) == []


def test_unknown_memberships_are_ignored(members, make_expense):
    """Test allocations naming someone who is not on the roster."""
    expenses = [make_expense([("former", 100)], [("member1", 40), ("former", 60)])]
    balances = compute_balances(expenses, members)
    assert nets(balances) == {"member1": -40, "member2": 0, "member3": 0}


def test_roster_order_and_duplicates():
    """Test that output follows the roster and duplicates collapse to the first entry."""
    roster = [
        Participant(membership_id="b", name="First B"),
        Participant(membership_id="a"),
        Participant(membership_id="b", name="Second B"),
    ]
    balances = compute_balances([], roster)
    assert [b.membership_id for b in balances] == ["b", "a"]
    assert balances[0].member.name == "First B"


def test_balances_sum_to_zero(members):
    """Test the zero-sum property on awkward allocations."""
    ids = [m.membership_id for m in members]
    bodies = [
        {
            "description": "Taxi",
            "total_amount": "100.01",
            "payers": [{"membership_id": "member2", "amount": "100.01"}],
            "shares": [{"membership_id": m, "weight": 1} for m in ids],
        },
        {
            "description": "Groceries",
            "total_amount": "7.77",
            "payers": [
                {"membership_id": "member1", "amount": "3.00"},
                {"membership_id": "member3", "amount": "4.77"},
            ],
            "shares": [{"membership_id": m, "weight": w} for m, w in zip(ids, [1, 2, 3])],
        },
        {
            "description": "Hotel",
            "total_amount": 333.33,
            "payers": [{"membership_id": "member3", "amount": 333.33}],
            "shares": [
                {"membership_id": "member1", "weight": 1.5},
                {"membership_id": "member2", "weight": 2.5},
            ],
        },
    ]
    expenses = [
        Expense(id=f"e{i}", **parse_expense_payload(body, ids, "USD").model_dump())
        for i, body in enumerate(bodies)
    ]
    balances = compute_balances(expenses, members)

    assert sum(b.net_cents for b in balances) == 0
    assert sum(b.paid_cents for b in balances) == 10001 + 777 + 33333


def test_is_settled(members, make_expense):
    """Test the settled check with and without tolerance."""
    assert is_settled(compute_balances([], members))

    balances = compute_balances(
        [make_expense([("member1", 101)], [("member1", 100), ("member2", 1)])],
        members
    )
    assert not is_settled(balances)
    assert is_settled(balances, tolerance_cents=1)
