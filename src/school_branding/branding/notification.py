"""Welcome toast shown once a school's branding has loaded."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

NOTIFICATION_CLASS = "school-notification"
FADE_IN_DELAY_MS = 100
VISIBLE_UNTIL_MS = 3000
FADE_OUT_MS = 300

_TOAST_COLORS = {"success": "#10b981", "info": "#3b82f6"}

_KEYFRAMES_ID = "school-notification-keyframes"
_KEYFRAMES_CSS = """
@keyframes school-notification-in {
    from { opacity: 0; transform: translateX(100%); }
    to { opacity: 1; transform: translateX(0); }
}
@keyframes school-notification-out {
    from { opacity: 1; transform: translateX(0); }
    to { opacity: 0; transform: translateX(100%); visibility: hidden; }
}
"""


def _toast_style(kind: str) -> str:
    background = _TOAST_COLORS.get(kind, _TOAST_COLORS["info"])
    return (
        "position: fixed; top: 20px; right: 20px; "
        f"background: {background}; color: white; "
        "padding: 12px 20px; border-radius: 8px; "
        "box-shadow: 0 4px 12px rgba(0,0,0,0.15); z-index: 9999; "
        "font-size: 14px; max-width: 300px; "
        "opacity: 0; transform: translateX(100%); "
        f"animation: school-notification-in {FADE_OUT_MS}ms ease "
        f"{FADE_IN_DELAY_MS}ms forwards, "
        f"school-notification-out {FADE_OUT_MS}ms ease "
        f"{VISIBLE_UNTIL_MS}ms forwards;"
    )


def render_notification(
    document: BeautifulSoup, message: str, kind: str = "info"
) -> Tag:
    """Append a self-dismissing toast to ``<body>``.

    The page is delivered already rendered, so the fade in, the auto hide
    and the final disappearance are CSS animations instead of timers.
    Any toast left from an earlier render is replaced.
    """
    for stale in document.select(f".{NOTIFICATION_CLASS}"):
        stale.decompose()

    head = document.head
    if head is not None and document.find(id=_KEYFRAMES_ID) is None:
        keyframes = document.new_tag("style", id=_KEYFRAMES_ID)
        keyframes.string = _KEYFRAMES_CSS
        head.append(keyframes)

    toast = document.new_tag("div", role="status")
    toast["class"] = [NOTIFICATION_CLASS, kind]
    toast["style"] = _toast_style(kind)
    toast.string = message

    body = document.body if document.body is not None else document
    body.append(toast)
    return toast
