from pickup_delivery.models import Move, Order, Plan, Train
from pickup_delivery.utils import PlanValidator

from conftest import A, B, C

VALID_MOVES = [
    Move(0, "Q1", B, (), A, ()),
    Move(30, "Q1", A, ("K1",), B, ()),
    Move(60, "Q1", B, (), C, ("K1",)),
]


def _validate(instance, network, moves, makespan):
    validator = PlanValidator(instance.orders, instance.trains, network)
    return validator.validate(Plan(moves, makespan))


def test_valid_plan(simple_instance, simple_network):
    result = _validate(simple_instance, simple_network, VALID_MOVES, 70)
    assert result.is_valid
    assert result.violations == []
    assert result.to_dict() == {"is_valid": True, "violations": [], "warnings": []}


def test_wrong_makespan(simple_instance, simple_network):
    result = _validate(simple_instance, simple_network, VALID_MOVES, 60)
    assert not result.is_valid
    assert "makespan" in result.violations[0]


def test_undelivered_order(simple_instance, simple_network):
    result = _validate(simple_instance, simple_network, VALID_MOVES[:2], 60)
    assert not result.is_valid
    assert any("never delivered" in v for v in result.violations)
    assert any("aboard" in v for v in result.violations)


def test_overloaded_train(simple_instance, simple_network):
    simple_instance.orders.append(Order("K2", 3, A, B))
    moves = [
        Move(0, "Q1", B, (), A, ()),
        Move(30, "Q1", A, ("K1", "K2"), B, ("K2",)),
        Move(60, "Q1", B, (), C, ("K1",)),
    ]
    result = _validate(simple_instance, simple_network, moves, 70)
    assert not result.is_valid
    assert any("8/6" in v for v in result.violations)


def test_teleporting_train(simple_instance, simple_network):
    moves = [
        Move(0, "Q1", A, ("K1",), B, ()),
        Move(30, "Q1", B, (), C, ("K1",)),
    ]
    result = _validate(simple_instance, simple_network, moves, 40)
    assert not result.is_valid
    assert any("but is at B" in v for v in result.violations)


def test_move_without_track(simple_instance, simple_network):
    moves = [
        Move(0, "Q1", B, (), A, ()),
        Move(30, "Q1", A, ("K1",), C, ("K1",)),
    ]
    result = _validate(simple_instance, simple_network, moves, 70)
    assert not result.is_valid
    assert any("without a track" in v for v in result.violations)


def test_early_departure(simple_instance, simple_network):
    moves = [
        Move(0, "Q1", B, (), A, ()),
        Move(10, "Q1", A, ("K1",), B, ()),
        Move(60, "Q1", B, (), C, ("K1",)),
    ]
    result = _validate(simple_instance, simple_network, moves, 70)
    assert any("before arriving" in v for v in result.violations)


def test_unload_at_wrong_station(simple_instance, simple_network):
    moves = [
        Move(0, "Q1", B, (), A, ()),
        Move(30, "Q1", A, ("K1",), B, ("K1",)),
    ]
    result = _validate(simple_instance, simple_network, moves, 60)
    assert any("expected C" in v for v in result.violations)


def test_load_at_wrong_station(simple_instance, simple_network):
    moves = [
        Move(0, "Q1", B, ("K1",), C, ("K1",)),
    ]
    result = _validate(simple_instance, simple_network, moves, 10)
    assert any("expected A" in v for v in result.violations)


def test_unknown_train(simple_instance, simple_network):
    moves = VALID_MOVES + [Move(0, "Q9", A, (), B, ())]
    result = _validate(simple_instance, simple_network, moves, 70)
    assert any("Unknown train Q9" in v for v in result.violations)


def test_order_already_at_destination_warns(simple_network):
    orders = [Order("K9", 1, A, A)]
    trains = [Train("Q1", 6, A)]
    moves = [
        Move(0, "Q1", A, ("K9",), B, ()),
        Move(30, "Q1", B, (), A, ("K9",)),
    ]
    result = PlanValidator(orders, trains, simple_network).validate(Plan(moves, 60))
    assert result.is_valid
    assert len(result.warnings) == 1
