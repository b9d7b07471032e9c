from conftest import BOOKSTORE, rig
from events.mapper import map_event, map_events
from fortune.core.game.money import EventType, GameEvent


def test_map_turn_events(small_game):
    rig(small_game, rolls=[4])
    small_game.roll_dice(0)
    small_game.buy_shop(0)

    mapped = map_events(small_game.board, small_game.event_log.events)
    by_type = {m["event_type"]: m for m in mapped}

    assert [m["seq"] for m in mapped] == list(range(len(mapped)))
    assert by_type["dice_roll"]["value"] == 4
    assert by_type["move"] == {
        "event_type": "move",
        "player_id": 0,
        "from_position": 0,
        "to_position": 4,
        "spaces": 4,
        "tile_name": "Bakery",
        "seq": by_type["move"]["seq"],
    }
    assert by_type["land"]["tile_type"] == "shop"
    assert by_type["purchase"]["cash_after"] == 1200
    assert by_type["ownership_changed"]["new_owner_id"] == 0
    assert by_type["suit_awarded"]["suit"] == "spade"


def test_map_fee_payment(small_game):
    small_game.ownership.transfer(BOOKSTORE, 0)
    rig(small_game, rolls=[1, 6])
    small_game.roll_dice(0)
    small_game.roll_dice(1)
    small_game.pay_fee(1)

    fee = [m for m in map_events(small_game.board, small_game.event_log.events) if m["event_type"] == "fee_payment"]

    assert len(fee) == 1
    assert fee[0]["payer_id"] == 1
    assert fee[0]["owner_id"] == 0
    assert fee[0]["shop_name"] == "Bookstore"
    assert fee[0]["amount"] == fee[0]["paid"] == 40


def test_map_events_start_offset(small_game):
    events = small_game.event_log.events_since(1)
    mapped = map_events(small_game.board, events, start=1)
    assert mapped[0]["seq"] == 1
    assert mapped[0]["event_type"] == "turn_start"
    assert mapped[0]["turn_number"] == 0


def test_bankruptcy_mapping(small_game):
    event = GameEvent(
        EventType.BANKRUPTCY,
        player_id=1,
        details={"details": {"creditor": 0, "amount": 40, "paid": 10, "stage": "insolvent"}},
    )
    assert map_event(small_game.board, event) == {
        "event_type": "bankruptcy",
        "player_id": 1,
        "creditor_id": 0,
        "amount": 40,
        "stage": "insolvent",
        "paid": 10,
    }


def test_flat_details_are_accepted(small_game):
    event = GameEvent(EventType.LEVEL_UP, player_id=0, details={"level": 3})
    assert map_event(small_game.board, event)["level"] == 3
