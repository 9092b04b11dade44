from __future__ import annotations

from typing import Dict, Optional

from gitgrab.schemas.status import ButtonView, Status, StatusView

# status -> (icon, icon_class, spin, fixed text, class_name); None text shows the form message
_STATUS_CONFIG: Dict[Status, tuple] = {
    Status.VALIDATING: ("loader-circle", "text-muted-foreground", True, "Validating repository...", "text-muted-foreground"),
    Status.CLONING: ("loader-circle", "text-accent", True, "Initiating clone...", "text-foreground"),
    Status.SUCCESS: ("check-circle", "text-success", False, None, "text-success"),
    Status.ERROR: ("x-circle", "text-destructive", False, None, "text-destructive"),
}

_BUTTON_LABELS: Dict[Status, str] = {
    Status.VALIDATING: "Validating",
    Status.CLONING: "Cloning",
}

DEFAULT_BUTTON_LABEL = "Clone Repository"


def is_loading(status: Status) -> bool:
    return status in (Status.VALIDATING, Status.CLONING)


def present_status(status: Status, message: str = "") -> Optional[StatusView]:
    """Status line content for `status`; idle renders nothing."""
    cfg = _STATUS_CONFIG.get(status)
    if cfg is None:
        return None

    icon, icon_class, spin, text, class_name = cfg
    return StatusView(
        icon=icon,
        icon_class=icon_class,
        spin=spin,
        text=text if text is not None else message,
        class_name=class_name,
    )


def present_button(status: Status) -> ButtonView:
    label = _BUTTON_LABELS.get(status)
    if label is None:
        return ButtonView(label=DEFAULT_BUTTON_LABEL)
    return ButtonView(label=label, spin=True, disabled=True)
