import pytest

from boardmirror.contracts.events import (
    BoardEvent,
    CardEvent,
    CheckItemEvent,
    ChecklistEvent,
    EventKind,
    ListEvent,
    UnsupportedEvent,
)
from boardmirror.contracts.exceptions import MalformedEventError
from boardmirror.contracts.replica import CheckItemState
from boardmirror.engine.events import parse_event
from tests.fakes.actions import action


def test_parse_board_event_keeps_only_present_fields() -> None:
    event = parse_event(action("updateBoard", board={"id": "b1", "closed": False}))

    assert event == BoardEvent(kind=EventKind.UPDATE_BOARD, board_id="b1", changes={"closed": False})


def test_parse_list_event() -> None:
    event = parse_event(action("updateList", list={"id": "L1", "name": "Doing"}))

    assert isinstance(event, ListEvent)
    assert (event.list_id, event.changes) == ("L1", {"name": "Doing"})


def test_parse_card_event_translates_remote_keys() -> None:
    event = parse_event(
        action(
            "updateCard",
            card={"id": "c1", "desc": "", "due": None, "dueComplete": True, "closed": True},
            list={"id": "L1"},
        )
    )

    assert isinstance(event, CardEvent)
    assert event.list_id == "L1"
    assert event.changes == {"description": "", "due_date": None, "due_date_complete": True, "archived": True}
    assert event.is_move is False


def test_parse_card_move_event() -> None:
    event = parse_event(
        action("updateCard", card={"id": "c1"}, listBefore={"id": "L1"}, listAfter={"id": "L2"})
    )

    assert isinstance(event, CardEvent)
    assert (event.list_before_id, event.list_after_id) == ("L1", "L2")
    assert event.is_move is True


def test_parse_checklist_event() -> None:
    event = parse_event(action("addChecklistToCard", card={"id": "c1"}, checklist={"id": "cl2", "name": "QA"}))

    assert event == ChecklistEvent(
        kind=EventKind.ADD_CHECKLIST_TO_CARD, board_id="b1", card_id="c1", checklist_id="cl2", name="QA"
    )


def test_parse_check_item_event_coerces_state() -> None:
    event = parse_event(
        action(
            "updateCheckItemStateOnCard",
            card={"id": "c1"},
            checklist={"id": "cl1"},
            checkItem={"id": "ci1", "state": "complete"},
        )
    )

    assert isinstance(event, CheckItemEvent)
    assert event.changes == {"state": CheckItemState.COMPLETE}


def test_parse_unknown_kind_is_unsupported() -> None:
    event = parse_event(action("addMemberToCard", card={"id": "c1"}))

    assert event == UnsupportedEvent(kind="addMemberToCard", board_id="b1")


@pytest.mark.parametrize(
    "raw",
    [
        {"data": {"board": {"id": "b1"}}},
        {"type": "updateCard"},
        {"type": "updateCard", "data": {"card": {"id": "c1"}}},
        action("updateCard", card={"name": "no id"}),
        action("createCard", card={"id": "c1"}),
        action("updateList", list={}),
        action("updateChecklist", card={"id": "c1"}),
        action("createCheckItem", card={"id": "c1"}, checklist={"id": "cl1"}),
        action("updateCheckItem", card={"id": "c1"}, checklist={"id": "cl1"}, checkItem={"id": "ci1", "state": "x"}),
    ],
)
def test_parse_rejects_malformed_actions(raw: dict) -> None:
    with pytest.raises(MalformedEventError):
        parse_event(raw)
