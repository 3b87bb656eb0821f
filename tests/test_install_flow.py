# tests/test_install_flow.py
import logging

import pytest

from steamcalc.ui.install_flow import (
    OUTCOME_ACCEPTED,
    OUTCOME_DISMISSED,
    DesktopEntryPrompt,
    InstallFlow,
)


class FakePrompt:
    def __init__(self, outcome):
        self.outcome = outcome
        self.prevented = False
        self.prompted = 0

    def prevent_default(self):
        self.prevented = True

    def prompt(self):
        self.prompted += 1

    def user_choice(self):
        return self.outcome


class Control:
    def __init__(self):
        self.visible = False

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False


@pytest.fixture
def control():
    return Control()


def make_flow(control, standalone=False):
    state = {"standalone": standalone}
    flow = InstallFlow(control.show, control.hide, lambda: state["standalone"])
    return flow, state


def test_click_without_pending_prompt_is_a_no_op(control):
    flow, _ = make_flow(control)
    assert flow.on_install_clicked() is None
    assert not control.visible


def test_install_available_defers_prompt_and_shows_control(control):
    flow, _ = make_flow(control)
    prompt = FakePrompt(OUTCOME_ACCEPTED)
    flow.on_install_available(prompt)
    assert prompt.prevented
    assert prompt.prompted == 0
    assert flow.can_install
    assert control.visible


@pytest.mark.parametrize("outcome, message", [
    (OUTCOME_ACCEPTED, "User accepted the install prompt"),
    (OUTCOME_DISMISSED, "User dismissed the install prompt"),
])
def test_click_prompts_logs_outcome_and_clears_handle(control, caplog, outcome, message):
    caplog.set_level(logging.INFO, logger="steamcalc")
    flow, _ = make_flow(control)
    prompt = FakePrompt(outcome)
    flow.on_install_available(prompt)

    assert flow.on_install_clicked() == outcome
    assert prompt.prompted == 1
    assert message in caplog.text
    assert not flow.can_install
    assert not control.visible
    assert flow.on_install_clicked() is None


def test_installed_clears_handle(control):
    flow, _ = make_flow(control)
    flow.on_install_available(FakePrompt(OUTCOME_ACCEPTED))
    flow.on_installed()
    assert not flow.can_install
    assert not control.visible


def test_standalone_keeps_control_hidden(control):
    flow, _ = make_flow(control, standalone=True)
    assert flow.refresh_display_mode() is True
    flow.on_install_available(FakePrompt(OUTCOME_ACCEPTED))
    assert not control.visible


def test_display_mode_change_hides_control(control):
    flow, state = make_flow(control)
    flow.on_install_available(FakePrompt(OUTCOME_ACCEPTED))
    assert control.visible
    state["standalone"] = True
    flow.refresh_display_mode()
    assert not control.visible


def test_desktop_entry_prompt_writes_launcher(tmp_path):
    prompt = DesktopEntryPrompt(lambda title, message: True, applications_dir=tmp_path)
    prompt.prompt()
    assert prompt.user_choice() == OUTCOME_ACCEPTED
    text = prompt.entry_path.read_text(encoding="utf-8")
    assert "Name=Steam Calculator" in text
    assert "-m steamcalc gui" in text


def test_desktop_entry_prompt_dismissed(tmp_path):
    prompt = DesktopEntryPrompt(lambda title, message: False, applications_dir=tmp_path)
    prompt.prompt()
    assert prompt.user_choice() == OUTCOME_DISMISSED
    assert not prompt.entry_path.exists()


def test_written_launcher_reports_installed(tmp_path, control, monkeypatch):
    monkeypatch.setattr("sys.platform", "linux")
    flow, _ = make_flow(control)
    installed = []

    def on_installed():
        installed.append(True)
        flow.on_installed()

    prompt = DesktopEntryPrompt(lambda title, message: True, applications_dir=tmp_path, on_installed=on_installed)
    assert prompt.available()
    flow.on_install_available(prompt)
    assert control.visible

    assert flow.on_install_clicked() == OUTCOME_ACCEPTED
    assert installed == [True]
    assert not flow.can_install
    assert not control.visible
    assert not prompt.available()


def test_dismissed_launcher_does_not_report_installed(tmp_path, control):
    installed = []
    flow, _ = make_flow(control)
    prompt = DesktopEntryPrompt(
        lambda title, message: False, applications_dir=tmp_path, on_installed=lambda: installed.append(True)
    )
    flow.on_install_available(prompt)
    assert flow.on_install_clicked() == OUTCOME_DISMISSED
    assert installed == []
