# tests/test_dashboard.py
from bloodbridge.client.dashboard import contact_links
from bloodbridge.core.errors import ProviderError

REQUEST = {"name": "City General", "address": "1 Main St", "blood_group": "B+", "quantity": 2}
DONATION = {"name": "Dana Donor", "blood_group": "B+", "age": 30, "phone_number": "555-0000"}

def test_donor_signup_listed(controller, donor_signup):
    assert controller.auth.sign_up(donor_signup)
    rows = controller.profiles.get_all_donors()
    assert any(r["email"] == "d1@x.com" and r["blood_group"] == "B+" for r in rows)

def test_urgent_view(controller, hospital_signup):
    assert controller.auth.sign_up(hospital_signup)
    assert controller.submit_request({**REQUEST, "urgency": "High"})
    assert controller.submit_request({**REQUEST, "urgency": "Low", "name": "Quiet Clinic"})

    assert controller.dashboard.load()
    assert [r["urgency"] for r in controller.dashboard.urgent_requests] == ["High"]
    assert len(controller.dashboard.my_requests) == 2
    assert controller.dashboard.my_donations == []

def test_stats_through_dashboard(make_controller, donor_signup, hospital_signup):
    donor = make_controller("donor")
    donor.auth.sign_up(donor_signup)
    assert donor.submit_donation(DONATION)

    hospital = make_controller("hospital")
    hospital.auth.sign_up(hospital_signup)
    hospital.submit_request({**REQUEST, "urgency": "Medium"})
    hospital.submit_request({**REQUEST, "blood_group": "AB-", "urgency": "Low"})

    assert hospital.dashboard.load()
    stats = hospital.dashboard.stats
    assert (stats.total, stats.recent, stats.matched) == (1, 1, 1)
    assert [d["email"] for d in donor.profiles.list_donations(email="d1@x.com")] == ["d1@x.com"]

def test_change_events_trigger_full_reload(make_controller, donor_signup, hospital_signup, notices):
    hospital = make_controller("hospital")
    hospital.auth.sign_up(hospital_signup)
    hospital.dashboard.load()
    sub = hospital.subscribe()

    donor = make_controller("donor")
    donor.auth.sign_up(donor_signup)
    donor.submit_donation(DONATION)
    donor.submit_donation({**DONATION, "blood_group": "O-"})

    events = sub.poll()
    assert [(e.table, e.type) for e in events] == [("blood_donations", "INSERT")] * 2
    assert hospital.dashboard.watch(events) == 2
    assert hospital.dashboard.loads == 3
    assert hospital.dashboard.stats.total == 2
    assert ("info", "New blood donation information available!") in notices
    assert sub.poll() == []

def test_request_insert_notifies(make_controller, hospital_signup, notices):
    hospital = make_controller()
    hospital.auth.sign_up(hospital_signup)
    sub = hospital.subscribe()
    hospital.submit_request({**REQUEST, "urgency": "High"})

    hospital.dashboard.watch(sub.poll())
    assert ("info", "New blood request submitted!") in notices
    assert len(hospital.dashboard.urgent_requests) == 1

def test_failed_load_keeps_previous_state(controller, hospital_signup, notices, monkeypatch):
    controller.auth.sign_up(hospital_signup)
    controller.submit_request({**REQUEST, "urgency": "High"})
    assert controller.dashboard.load()

    def down(**kwargs):
        raise ProviderError()
    monkeypatch.setattr(controller.profiles, "list_donations", down)

    assert controller.dashboard.refresh() is False
    assert notices[-1] == ("error", "Failed to load dashboard data")
    assert len(controller.dashboard.requests) == 1
    assert controller.dashboard.loads == 1

def test_load_requires_session(controller, notices):
    assert controller.dashboard.load() is False
    assert notices[-1] == ("error", "User email not found. Please try logging in again.")

def test_submit_validation(controller, donor_signup, notices, repo):
    controller.auth.sign_up(donor_signup)
    assert controller.submit_donation({"name": "Dana", "blood_group": "B+"}) is False
    assert notices[-1] == ("error", "Please fill in all fields")
    assert repo.tables["blood_donations"] == {}

def test_logout_resets_dashboard(controller, hospital_signup):
    controller.auth.sign_up(hospital_signup)
    controller.submit_request({**REQUEST, "urgency": "High"})
    controller.dashboard.load()

    controller.logout()
    assert controller.dashboard.requests == []
    assert controller.dashboard.stats.total == 0

def test_contact_links_verbatim():
    links = contact_links({"email": "h1@x.com", "phone_number": "+1 (555) 0000"})
    assert links == {"tel": "tel:+1 (555) 0000", "mailto": "mailto:h1@x.com"}
    assert contact_links({"name": "no contact"}) == {}

def test_watch_survives_failed_poll(make_controller, hospital_signup, notices, monkeypatch):
    hospital = make_controller()
    hospital.auth.sign_up(hospital_signup)
    hospital.dashboard.load()
    sub = hospital.subscribe(interval=0)
    hospital.submit_request({**REQUEST, "urgency": "High"})

    real_events = hospital.api.events
    calls = []
    def flaky(*args, **kwargs):
        calls.append(1)
        if len(calls) == 1:
            raise ProviderError()
        return real_events(*args, **kwargs)
    monkeypatch.setattr(hospital.api, "events", flaky)

    assert hospital.dashboard.watch(sub, limit=1) == 1
    assert ("error", "Failed to receive live updates") in notices
    assert len(hospital.dashboard.urgent_requests) == 1
