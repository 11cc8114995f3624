"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

# Dark slate palette with a sky-blue accent
HEAVEN_NIGHT = Theme(
    name="heaven-night",
    primary="#7dcfff",
    secondary="#bb9af7",
    accent="#e0af68",
    foreground="#c0caf5",
    background="#16161e",
    success="#9ece6a",
    warning="#ff9e64",
    error="#f7768e",
    surface="#1a1b26",
    panel="#1f2335",
    dark=True,
    variables={
        "block-cursor-foreground": "#16161e",
        "block-cursor-background": "#7dcfff",
        "block-cursor-text-style": "bold",
        "input-selection-background": "#7dcfff 30%",
        "border": "#3b4261",
        "border-blurred": "#292e42",
        "scrollbar": "#292e42",
        "scrollbar-hover": "#3b4261",
        "scrollbar-active": "#7dcfff",
        "scrollbar-background": "#1f2335",
        "footer-foreground": "#a9b1d6",
        "footer-background": "#16161e",
        "footer-key-foreground": "#e0af68",
        "footer-key-background": "#292e42",
        "text-muted": "#565f89",
        "text-error": "#f7768e",
    },
)

THEMES = [HEAVEN_NIGHT]
