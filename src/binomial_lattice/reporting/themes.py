"""Colour tables for lattice diagrams."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TreeTheme:
    """Colours used by `plot_tree`.

    `background` is the figure face colour; the rest follow the node roles.
    """

    background: str
    grid: str
    text: str
    node_fill: str
    node_stroke: str
    exercise: str
    terminal: str
    value_text: str


DEFAULT_THEME = "bloomberg"

TREE_THEMES: dict[str, TreeTheme] = {
    "bloomberg": TreeTheme(
        background="#000000",
        grid="#333333",
        text="#888888",
        node_fill="#1a1a1a",
        node_stroke="#ff9900",
        exercise="#00ff00",
        terminal="#555555",
        value_text="#ff9900",
    ),
    "light": TreeTheme(
        background="#ffffff",
        grid="#dddddd",
        text="#666666",
        node_fill="#ffffff",
        node_stroke="#2563eb",
        exercise="#16a34a",
        terminal="#999999",
        value_text="#2563eb",
    ),
    "matrix": TreeTheme(
        background="#000000",
        grid="#003300",
        text="#00aa00",
        node_fill="#0a0a0a",
        node_stroke="#00ff00",
        exercise="#00ff00",
        terminal="#005500",
        value_text="#00ff00",
    ),
    "midnight": TreeTheme(
        background="#0f172a",
        grid="#334155",
        text="#94a3b8",
        node_fill="#1e293b",
        node_stroke="#38bdf8",
        exercise="#4ade80",
        terminal="#475569",
        value_text="#38bdf8",
    ),
    "sunset": TreeTheme(
        background="#1a1a2e",
        grid="#e94560",
        text="#c4c4c4",
        node_fill="#16213e",
        node_stroke="#ff6b6b",
        exercise="#4ecdc4",
        terminal="#e94560",
        value_text="#feca57",
    ),
    "pink": TreeTheme(
        background="#2d1b2e",
        grid="#ff69b4",
        text="#d4a5d4",
        node_fill="#3d2745",
        node_stroke="#ff69b4",
        exercise="#ff1493",
        terminal="#8b4570",
        value_text="#ffb3d9",
    ),
    "laurier": TreeTheme(
        background="#1a0f2e",
        grid="#6a3fb5",
        text="#d4af37",
        node_fill="#2e1a52",
        node_stroke="#ffd700",
        exercise="#ffd700",
        terminal="#4a2882",
        value_text="#ffd700",
    ),
}


def get_tree_theme(name: str | None) -> TreeTheme:
    """Look up a theme by name, falling back to the default theme."""
    if name is None:
        return TREE_THEMES[DEFAULT_THEME]
    return TREE_THEMES.get(name.strip().lower(), TREE_THEMES[DEFAULT_THEME])
