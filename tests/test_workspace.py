# tests/test_workspace.py
from core.stores import StoreStatus
from tests.conftest import USER_ID


def seed_quarter_with_data(client, name, active, meeting_name, deal_name):
    q = client.seed("quarters", user_id=USER_ID, name=name, is_active=active)
    client.seed("goals", user_id=USER_ID, quarter_id=q["id"], meeting_goal=4, mmr_goal=1000)
    client.seed(
        "meetings",
        user_id=USER_ID,
        quarter_id=q["id"],
        contact_name=meeting_name,
        company_name="Co",
        meeting_date="2024-01-10",
        outcome="Completed",
    )
    client.seed("deals", user_id=USER_ID, quarter_id=q["id"], name=deal_name, value=500)
    return q


def test_new_user_onboarding_end_to_end(workspace, fake_client):
    resolution = workspace.bootstrap()
    assert resolution.needs_onboarding
    assert workspace.needs_onboarding

    assert workspace.onboarding.submit_name("Q1 2024")
    assert workspace.onboarding.step == 2
    quarter_id = workspace.finish_onboarding(10, 5000)

    assert quarter_id is not None
    assert not workspace.needs_onboarding
    assert workspace.current_quarter_id == quarter_id
    assert (workspace.goals.goals.meeting_goal, workspace.goals.goals.mmr_goal) == (10, 5000)

    again = workspace.quarters.resolve_current_quarter()
    assert again.quarter_id == quarter_id
    actives = [q for q in fake_client.tables["quarters"] if q["is_active"]]
    assert [q["name"] for q in actives] == ["Q1 2024"]


def test_meeting_progress_end_to_end(workspace, fake_client):
    q = fake_client.seed("quarters", user_id=USER_ID, name="Q1", is_active=True)
    fake_client.seed("goals", user_id=USER_ID, quarter_id=q["id"], meeting_goal=4, mmr_goal=1000)
    workspace.bootstrap()

    for outcome in ("Scheduled", "Completed", "No show"):
        workspace.meetings.create("Ann", "Acme", "2024-01-10", outcome)

    summary = workspace.summary()
    assert summary.meetings_counted == 2
    assert summary.meeting_percent == 50


def test_switching_quarter_rescopes_every_store(workspace, fake_client):
    qa = seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    qb = seed_quarter_with_data(fake_client, "B", False, "Bob", "Deal B")
    workspace.bootstrap()
    assert workspace.current_quarter_id == qa["id"]
    workspace.meetings.create("Created in A", "Co", "2024-01-11")

    assert workspace.select_quarter(qb["id"])

    assert workspace.current_quarter_id == qb["id"]
    assert [m.contact_name for m in workspace.meetings.items] == ["Bob"]
    assert [d.name for d in workspace.deals.items] == ["Deal B"]
    assert workspace.goals.goals.quarter_id == qb["id"]
    for store in (workspace.goals, workspace.meetings, workspace.deals):
        assert store.quarter_id == qb["id"]
        assert store.status is StoreStatus.READY


def test_failed_quarter_selection_keeps_scope(workspace, fake_client):
    qa = seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    qb = seed_quarter_with_data(fake_client, "B", False, "Bob", "Deal B")
    workspace.bootstrap()
    fake_client.fail_next("quarters", "update")

    assert workspace.select_quarter(qb["id"]) is False
    assert workspace.current_quarter_id == qa["id"]
    assert [m.contact_name for m in workspace.meetings.items] == ["Alice"]


def test_create_quarter_from_picker(workspace, fake_client):
    seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    workspace.bootstrap()

    new_id = workspace.create_quarter("Q3")

    assert workspace.current_quarter_id == new_id
    assert workspace.meetings.items == []
    assert workspace.goals.goals is None


def test_fetch_failure_leaves_no_quarter_selected(workspace, fake_client):
    fake_client.fail_next("quarters", "select")

    workspace.bootstrap()

    assert workspace.current_quarter_id is None
    assert not workspace.needs_onboarding
    assert workspace.meetings.status is StoreStatus.UNINITIALIZED

    workspace.start_onboarding()
    assert workspace.needs_onboarding
    assert workspace.onboarding.step == 1


def test_two_step_meeting_delete(workspace, fake_client, clock):
    seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    workspace.bootstrap()
    meeting_id = workspace.meetings.items[0].id

    assert workspace.request_meeting_delete(meeting_id) is False
    assert workspace.meetings.get(meeting_id) is not None
    assert fake_client.calls_to("meetings", "delete") == []

    clock.advance(1)
    assert workspace.request_meeting_delete(meeting_id) is True
    assert workspace.meetings.items == []


def test_expired_deal_delete_rearms(workspace, fake_client, clock):
    seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    workspace.bootstrap()
    deal_id = workspace.deals.items[0].id

    workspace.request_deal_delete(deal_id)
    clock.advance(3.5)

    assert workspace.request_deal_delete(deal_id) is False
    assert workspace.deals.get(deal_id) is not None
    assert workspace.deal_deletes.is_pending(deal_id)


def test_meeting_and_deal_slots_are_independent(workspace, fake_client):
    seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    workspace.bootstrap()
    meeting_id = workspace.meetings.items[0].id
    deal_id = workspace.deals.items[0].id

    workspace.request_meeting_delete(meeting_id)
    workspace.request_deal_delete(deal_id)

    assert workspace.meeting_deletes.is_pending(meeting_id)
    assert workspace.deal_deletes.is_pending(deal_id)


def test_sign_out_notification_clears_everything(workspace, fake_client):
    seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    workspace.listen()
    workspace.bootstrap()

    workspace.sign_out()

    assert workspace.current_quarter_id is None
    assert not workspace.bootstrapped
    assert workspace.meetings.items == []
    assert workspace.deals.items == []
    assert workspace.goals.goals is None


def test_sign_in_notification_bootstraps(workspace, fake_client):
    seed_quarter_with_data(fake_client, "A", True, "Alice", "Deal A")
    fake_client.auth.user_id = None
    workspace.listen()

    workspace.session.sign_in("rep@example.com", "secret")

    assert workspace.bootstrapped
    assert [m.contact_name for m in workspace.meetings.items] == ["Alice"]


def test_close_stops_notifications(workspace, fake_client):
    workspace.listen()
    workspace.close()
    assert fake_client.auth.listeners == []
