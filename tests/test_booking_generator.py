import random

import pytest

from src.data_layer.catalog import GUEST_GROUP_NAMES, Catalog
from src.simulation_layer.booking_generator import BookingGenerator
from src.simulation_layer.errors import InsufficientResource, NoCapacity, UnknownBooking
from src.simulation_layer.ledger import EconomyLedger
from src.simulation_layer.models import PlayerStats
from src.simulation_layer.slot_scheduler import SlotScheduler

UPGRADES = {"lodge": 1, "zipline": 2, "coffee": 1, "shuttle": 1}


@pytest.fixture
def generator():
    return BookingGenerator(Catalog(), random.Random(42))


@pytest.fixture
def scheduler(clock):
    stats = PlayerStats(
        money=1500,
        eco_score=85,
        reputation=50,
        inventory={"gear": 5, "permit": 5, "beans": 10, "fuel": 5},
        upgrades=dict(UPGRADES),
    )
    return SlotScheduler(EconomyLedger(stats, Catalog()), clock, slot_count=6)


def test_batch_shape(generator):
    catalog = Catalog()
    batch = generator.generate(UPGRADES)

    assert len(batch) == 4
    assert [b.group_name for b in batch] == list(GUEST_GROUP_NAMES)
    assert len({b.id for b in batch}) == 4
    for booking in batch:
        base = catalog.get(booking.service_id, UPGRADES[booking.service_id]).base_price
        assert base <= booking.total_pay <= base * 1.5
        assert booking.urgency in ("low", "high")
        assert 1 <= booking.quantity <= 2


def test_new_batch_replaces_pending(generator):
    first = generator.generate(UPGRADES)
    second = generator.generate(UPGRADES)

    assert generator.pending == second
    assert not {b.id for b in first} & {b.id for b in second}


def test_same_seed_same_batch():
    a = BookingGenerator(Catalog(), random.Random(5)).generate(UPGRADES)
    b = BookingGenerator(Catalog(), random.Random(5)).generate(UPGRADES)
    assert a == b


def test_accept_seats_in_first_empty_slot(generator, scheduler):
    scheduler.assign(0, "coffee")
    request = generator.generate(UPGRADES)[0]

    slot = generator.accept(request, scheduler)

    assert slot.id == 1
    assert slot.guest_name == request.group_name
    assert slot.service_id == request.service_id
    assert request not in generator.pending
    assert len(generator.pending) == 3


def test_accept_without_capacity_keeps_request(generator, scheduler):
    for slot_id in range(6):
        scheduler.assign(slot_id, "coffee")
    request = generator.generate(UPGRADES)[0]

    with pytest.raises(NoCapacity):
        generator.accept(request, scheduler)
    assert request in generator.pending


def test_accept_without_resources_keeps_request(generator, scheduler):
    request = generator.generate(UPGRADES)[0]
    scheduler.ledger.stats.inventory = {}

    with pytest.raises(InsufficientResource):
        generator.accept(request, scheduler)
    assert request in generator.pending
    assert all(s.is_empty for s in scheduler.slots)


def test_find_unknown(generator):
    generator.generate(UPGRADES)
    with pytest.raises(UnknownBooking):
        generator.find("b-missing")
