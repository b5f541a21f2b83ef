"""Parser for command-not-found helper output.

The helper writes three kinds of useful lines to stderr::

    Command 'cargo' not found, but can be installed with:
    sudo snap install rustup  # version 1.28.2, or
    sudo apt  install cargo   # version 1.75.0+dfsg0ubuntu1-0ubuntu7.1

or, when it only knows similarly named commands::

    Command 'dgo' not found, did you mean:
      command 'dog' from snap dog (v0.1.0)
      command 'go' from deb golang-go (2:1.22~2build1)
    See 'snap info <snapname>' for additional versions.

There is no formal grammar, so every line is classified on its own and folded
into the result in one forward pass.
"""

from __future__ import annotations

from collections.abc import Iterable

from .types import LineKind, ParseResult

ACTION_PREFIX = "sudo "
CANDIDATE_INDENT = "  "
COMMENT_MARKER = "#"
DEB_MARKER = " deb "
SNAP_MARKER = " snap "
SNAP_INSTALL = "snap install "
PADDED_APT_INSTALL = "apt  install"


def classify_line(line: str) -> LineKind:
    """Classify one raw line. Checks run in priority order."""

    if line.startswith(ACTION_PREFIX):
        return LineKind.ACTION
    if line.startswith(CANDIDATE_INDENT) and line.strip():
        return LineKind.CANDIDATE
    if line.strip():
        return LineKind.TEXT
    return LineKind.BLANK


def normalize_action(line: str) -> str:
    """Drop the trailing version comment and fix column padding."""

    text = line.split(COMMENT_MARKER, 1)[0].strip()
    return text.replace(PADDED_APT_INSTALL, "apt install")


def package_after(line: str, marker: str) -> str | None:
    """Return the token following ``marker``, or None if the marker is absent."""

    index = line.find(marker)
    if index < 0:
        return None
    rest = line[index + len(marker) :].lstrip(" ")
    name = rest.split(" ", 1)[0]
    return name or None


def snap_info_for_action(action: str) -> str | None:
    body = action[len(ACTION_PREFIX) :]
    if not body.startswith(SNAP_INSTALL):
        return None
    name = body[len(SNAP_INSTALL) :].split(" ", 1)[0]
    if not name:
        return None
    return f"snap info {name}"


def candidate_suggestions(line: str) -> list[str] | None:
    """Suggestions for one indented candidate line; None when it names no package."""

    if DEB_MARKER in line:
        deb = package_after(line, DEB_MARKER)
        return [f"sudo apt install {deb}"] if deb else None
    snap = package_after(line, SNAP_MARKER)
    if snap is not None:
        return [f"snap info {snap}", f"sudo snap install {snap}"]
    return None


def parse_output(lines: Iterable[str], stdout_text: str = "") -> ParseResult:
    """Fold helper stderr lines into a ParseResult.

    Args:
        lines: stderr lines, consumed once until exhausted.
        stdout_text: fully read stdout. Supplies the footer when the
            stderr pass did not find one.

    Returns:
        A ParseResult. Check ``present`` before using it.
    """

    header: str | None = None
    footer: str | None = None
    actions: list[str] = []
    suggestions: list[str] = []
    extra: list[str] = []

    for raw in lines:
        line = raw.rstrip("\r\n")
        kind = classify_line(line)
        if kind is LineKind.BLANK:
            continue

        if kind is LineKind.ACTION:
            action = normalize_action(line)
            info = snap_info_for_action(action)
            if info is not None:
                extra.append(info)
            actions.append(action)
        elif kind is LineKind.CANDIDATE:
            derived = candidate_suggestions(line)
            if derived is None:
                continue
            actions.append(line.strip())
            suggestions.extend(derived)
        elif actions:
            footer = line.strip()
        else:
            header = line.strip()

    if not footer:
        footer = stdout_text.strip() or None

    if not header or not actions:
        return ParseResult(header=header, actions=actions, footer=footer)

    return ParseResult(
        header=header,
        actions=actions,
        footer=footer,
        suggestions=suggestions or list(actions),
        extra_suggestions=extra,
    )
