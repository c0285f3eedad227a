import json

from boardmirror.contracts.replica import Board, BoardList, Card, CheckItem, CheckItemState, Checklist, ReplicaDocument


def test_card_accepts_camel_case_and_field_names() -> None:
    by_alias = Card.model_validate({"id": "c1", "dueDate": "2024-05-01", "dueDateComplete": True, "startDate": None})
    by_name = Card(id="c1", due_date="2024-05-01", due_date_complete=True)

    assert by_alias == by_name
    assert by_alias.description == ""
    assert by_alias.archived is False
    assert by_alias.checklists == []


def test_document_dumps_interop_shape() -> None:
    document = ReplicaDocument(
        last_edited_board_id="b1",
        boards={
            "b1": Board(
                id="b1",
                name="Roadmap",
                lists=[
                    BoardList(
                        id="L1",
                        name="To Do",
                        cards=[
                            Card(
                                id="c1",
                                name="Write docs",
                                due_date="2024-05-01",
                                checklists=[Checklist(id="cl1", items=[CheckItem(id="ci1", name="Draft")])],
                            )
                        ],
                    )
                ],
            )
        },
    )

    payload = json.loads(document.model_dump_json(by_alias=True))

    assert payload["lastEditedBoardId"] == "b1"
    card = payload["boards"]["b1"]["lists"][0]["cards"][0]
    assert card["dueDate"] == "2024-05-01"
    assert card["startDate"] is None
    assert card["checklists"][0]["items"][0] == {"id": "ci1", "name": "Draft", "state": "incomplete"}


def test_find_helpers_return_first_match_or_none() -> None:
    checklist = Checklist(id="cl1", items=[CheckItem(id="ci1", state=CheckItemState.COMPLETE)])
    card = Card(id="c1", checklists=[checklist])
    board = Board(id="b1", lists=[BoardList(id="L1", cards=[card])])

    assert board.find_list("L1") is not None
    assert board.find_list("L9") is None
    assert board.lists[0].find_card("c1") == card
    assert card.find_checklist("cl1") == checklist
    assert checklist.find_item("ci1").state == CheckItemState.COMPLETE
    assert checklist.find_item("ci9") is None
