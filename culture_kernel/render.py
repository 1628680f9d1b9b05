from __future__ import annotations

import json
import re
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .cache import CatalogCache
from .errors import RequestHandlingError

class RenderMode(str, Enum):
    STRUCTURED = "structured"
    TABULAR = "tabular"

class Rendered(NamedTuple):
    body: str
    media_type: str

JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"

# Product tokens of command-line fetch tools, lowercased.
CLI_AGENTS = ("curl", "wget", "httpie", "xh", "fetch")

# (header, field, width)
COLUMNS: Tuple[Tuple[str, str, int], ...] = (
    ("ID", "protocol_id", 20),
    ("NAME", "name", 28),
    ("ORIGIN", "origin_culture", 30),
    ("CATEGORY", "category", 22),
    ("BUG FIXED", "bug_fixed", 40),
)
GAP = "  "
ELLIPSIS = "..."

BOLD = "\x1b[1m"
CYAN = "\x1b[36m"
TITLE = "\x1b[1;37;44m"
RESET = "\x1b[0m"
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

def _accepted_types(accept: str) -> List[str]:
    types = []
    for part in accept.split(","):
        media, _, params = part.strip().partition(";")
        media = media.strip().lower()
        if not media:
            continue
        q = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        if q > 0:
            types.append(media)
    return types

def _is_cli_agent(user_agent: str) -> bool:
    ua = user_agent.strip().lower()
    if "powershell" in ua:
        return True
    product = ua.split("/", 1)[0].split(" ", 1)[0]
    return product in CLI_AGENTS

def negotiate(user_agent: Optional[str], accept: Optional[str]) -> RenderMode:
    types = _accepted_types(accept or "")
    if any(t == JSON_MEDIA_TYPE or t.endswith("+json") for t in types):
        return RenderMode.STRUCTURED
    if "text/plain" in types:
        return RenderMode.TABULAR
    if user_agent and _is_cli_agent(user_agent):
        return RenderMode.TABULAR
    return RenderMode.STRUCTURED

def render_structured(cache: CatalogCache) -> str:
    return json.dumps(
        [p.model_dump(mode="json") for p in cache],
        ensure_ascii=False,
        indent=2,
    )

def truncate(value: str, width: int) -> str:
    value = " ".join(value.split())
    if len(value) <= width:
        return value
    return value[: width - len(ELLIPSIS)] + ELLIPSIS

def _line(cells: Sequence[str], styles: Sequence[str]) -> str:
    out = []
    last = len(COLUMNS) - 1
    for i, ((_, _, width), cell, style) in enumerate(zip(COLUMNS, cells, styles)):
        text = truncate(cell, width)
        if i < last:
            text = text.ljust(width)
        out.append(f"{style}{text}{RESET}" if style else text)
    return GAP.join(out)

def render_tabular(cache: CatalogCache, color: bool = True) -> str:
    no_style = [""] * len(COLUMNS)
    header_style = [BOLD] * len(COLUMNS) if color else no_style
    row_style = [CYAN] + [""] * (len(COLUMNS) - 1) if color else no_style
    total_width = sum(w for _, _, w in COLUMNS) + len(GAP) * (len(COLUMNS) - 1)

    title = " AVAILABLE RITUALS "
    lines = [f"{TITLE}{title}{RESET}" if color else title]
    lines.append(_line([h for h, _, _ in COLUMNS], header_style))
    lines.append("-" * total_width)
    for p in cache:
        lines.append(_line([getattr(p, f) for _, f, _ in COLUMNS], row_style))
    lines.append("-" * total_width)
    lines.append(f"{len(cache)} rituals")
    return "\n".join(lines) + "\n"

def strip_styles(text: str) -> str:
    return ANSI_RE.sub("", text)

def render(cache: CatalogCache, mode: RenderMode, color: bool = True) -> Rendered:
    try:
        if mode is RenderMode.TABULAR:
            return Rendered(render_tabular(cache, color=color), TEXT_MEDIA_TYPE)
        return Rendered(render_structured(cache), JSON_MEDIA_TYPE)
    except Exception as e:
        raise RequestHandlingError(f"failed to render catalog as {mode.value}") from e
