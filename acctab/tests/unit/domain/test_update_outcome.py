from acctab.domain.update_outcome import classify_outcomes


def test_marker_messages_are_classified_in_order() -> None:
    outcomes = classify_outcomes(
        ["✅ 001 updated", "❌ 002 failed: locked", "✅ 001 updated", "no marker"]
    )

    assert [o.severity for o in outcomes] == ["success", "error", "success", "error"]
    assert outcomes[1].message == "❌ 002 failed: locked"


def test_structured_items_use_success_flag() -> None:
    outcomes = classify_outcomes(
        [
            {"id": "001", "success": True, "message": "updated"},
            {"Id": "002", "success": False, "message": "✅ misleading marker"},
            {"message": "✅ marker only"},
        ]
    )

    assert [o.success for o in outcomes] == [True, False, True]
    assert [o.record_id for o in outcomes] == ["001", "002", None]
