# tests/test_gateway.py
from pathlib import Path

from bloodbridge.client import AppController
from bloodbridge.core.config import settings
from bloodbridge.core.errors import ProviderError

def test_signup_then_login(controller, donor_signup, notices):
    assert controller.auth.sign_up(donor_signup) is True
    assert notices[-1] == ("success", "Account created successfully!")
    controller.logout()

    assert controller.auth.login("d1@x.com", "secret123", "donor") is True
    user = controller.auth.get_current_user()
    assert (user.role, user.email) == ("donor", "d1@x.com")
    assert controller.auth.is_authenticated()

def test_hospital_signup_creates_hospital_profile(controller, hospital_signup):
    assert controller.auth.sign_up(hospital_signup)
    hospitals = controller.profiles.get_all_hospitals()
    assert [h["email"] for h in hospitals] == ["h1@x.com"]
    assert controller.profiles.get_donor("h1@x.com") is None

def test_duplicate_signup_same_role(controller, donor_signup, notices):
    assert controller.auth.sign_up(donor_signup)
    controller.logout()

    assert controller.auth.sign_up({**donor_signup, "name": "Someone Else"}) is False
    assert notices[-1] == ("error", "A donor with this email already exists")
    assert len(controller.profiles.get_all_donors()) == 1

def test_duplicate_identity_other_role(controller, donor_signup, hospital_signup, notices):
    assert controller.auth.sign_up(donor_signup)
    controller.logout()

    assert controller.auth.sign_up({**hospital_signup, "email": "d1@x.com"}) is False
    assert notices[-1] == ("error", "User already registered")
    assert controller.profiles.get_all_hospitals() == []

def test_login_with_wrong_role_fails(controller, donor_signup, notices, repo):
    assert controller.auth.sign_up(donor_signup)
    controller.logout()

    assert controller.auth.login("d1@x.com", "secret123", "hospital") is False
    assert notices[-1] == ("error", "No hospital account found for this email")
    assert controller.api.token is None
    assert controller.session.role is None
    # the sign-in token was revoked again
    assert len(repo.revoked) == 2

def test_login_bad_password(controller, donor_signup, notices):
    controller.auth.sign_up(donor_signup)
    controller.logout()
    assert controller.auth.login("d1@x.com", "nope-nope", "donor") is False
    assert notices[-1] == ("error", "Invalid login credentials")
    assert not controller.auth.is_authenticated()

def test_missing_field_caught_before_network(controller, donor_signup, notices, repo):
    del donor_signup["phone_number"]
    assert controller.auth.sign_up(donor_signup) is False
    assert notices[-1] == ("error", "Please fill in all fields")
    assert repo.users == {}

def test_underage_donor_rejected(controller, donor_signup, notices, repo):
    assert controller.auth.sign_up({**donor_signup, "age": 17}) is False
    assert notices[-1][1].startswith("age:")
    assert repo.users == {}

def test_unknown_blood_group_rejected(controller, hospital_signup, repo):
    assert controller.auth.sign_up({**hospital_signup, "blood_group": "C+"}) is False
    assert repo.users == {}

def test_provider_message_passed_through(controller, donor_signup, notices):
    assert controller.auth.sign_up({**donor_signup, "password": "abc"}) is False
    assert notices[-1] == ("error", "Password should be at least 6 characters")

def test_profile_insert_failure_leaves_orphan_identity(controller, donor_signup, repo, monkeypatch):
    def boom(profile):
        raise ProviderError("insert failed", 500)
    monkeypatch.setattr(controller.profiles, "insert_profile", boom)

    assert controller.auth.sign_up(donor_signup) is False
    assert "d1@x.com" in repo.users
    assert controller.session.role is None
    assert controller.api.token is None

def test_logout_clears_session(controller, donor_signup, tmp_path):
    controller.auth.sign_up(donor_signup)
    assert (tmp_path / "session.json").exists()

    controller.logout()
    assert not (tmp_path / "session.json").exists()
    assert controller.auth.is_authenticated() is False
    user = controller.auth.get_current_user()
    assert (user.role, user.email) == (None, None)

def test_session_survives_restart(make_controller, donor_signup):
    first = make_controller()
    first.auth.sign_up(donor_signup)

    second = make_controller()
    assert second.auth.is_authenticated()
    assert second.auth.get_current_user().email == "d1@x.com"

def test_signed_out_elsewhere_is_not_authenticated(make_controller, donor_signup, repo):
    first = make_controller()
    first.auth.sign_up(donor_signup)
    second = make_controller()

    first.logout()
    # second still holds the cached role in memory
    assert second.session.role == "donor"
    assert second.auth.is_authenticated() is False

def test_donor_cannot_add_hospital_profile(controller, donor_signup):
    assert controller.auth.sign_up(donor_signup)
    row = {"email": "d1@x.com", "name": "Fake Hospital", "address": "1 Main St",
           "blood_group": "B+", "quantity": 1, "urgency": "High"}
    try:
        controller.api.insert("hospital_info", row)
    except ProviderError as exc:
        assert exc.status_code == 403
    else:
        raise AssertionError("donor token wrote a hospital profile")

    controller.logout()
    assert controller.auth.login("d1@x.com", "secret123", "hospital") is False

def test_logout_with_provider_down_clears_session(controller, donor_signup, tmp_path, monkeypatch):
    controller.auth.sign_up(donor_signup)

    def down():
        raise ProviderError()
    monkeypatch.setattr(controller.api, "sign_out", down)

    controller.logout()
    assert controller.session.role is None
    assert not (tmp_path / "session.json").exists()
    assert controller.api.token is None

def test_is_authenticated_leaves_client_token_alone(controller, donor_signup):
    controller.auth.sign_up(donor_signup)
    controller.api.set_token("some-other-token")

    assert controller.auth.is_authenticated() is True
    assert controller.api.token == "some-other-token"

def test_default_session_file_from_settings():
    ctl = AppController(http=object())
    assert ctl.session.path == Path(settings.session_file).expanduser()
