"""Once-a-day check for a newer release."""

from __future__ import annotations

import json
import os
import re
import sys
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from packaging.version import InvalidVersion, Version

from sagegit.ui.style import info

STATE_FILE_NAME = "update_check.json"
CHECK_INTERVAL = timedelta(hours=24)
GITHUB_API = "https://api.github.com"
RELEASE_REPO_ENV = "SAGE_RELEASE_REPO"
REQUEST_TIMEOUT = 10.0

_TIME_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(?P<frac>\d+))?(?P<tz>Z|[+-]\d{2}:\d{2})?$"
)


@dataclass
class CheckState:
    """When the last check ran and which version it found."""

    last_check: datetime
    version: str


def _parse_time(text: str) -> datetime:
    match = _TIME_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    frac = match["frac"] or ""
    iso = match["base"] + (("." + frac.ljust(6, "0")[:6]) if frac else "")
    tz = match["tz"]
    if tz and tz != "Z":
        iso += tz
    moment = datetime.fromisoformat(iso)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _read_state(path: Path) -> CheckState:
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("check state is not an object")
    raw_time = data.get("last_check")
    last_check = (
        _parse_time(raw_time)
        if isinstance(raw_time, str)
        else datetime(1, 1, 1, tzinfo=timezone.utc)
    )
    return CheckState(last_check=last_check, version=str(data.get("version", "")))


def get_config_path() -> Path:
    """Return the path of the check state file, creating its directory."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA", "")
        if not appdata:
            raise OSError("APPDATA environment variable not set")
        config_dir = Path(appdata) / "sage"
    else:
        config_dir = Path.home() / ".config" / "sage"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / STATE_FILE_NAME


def should_check(path: str | os.PathLike[str]) -> bool:
    """Return whether a day has passed since the last check recorded at ``path``."""
    try:
        state = _read_state(Path(path))
    except (OSError, ValueError):
        return True
    return datetime.now(timezone.utc) - state.last_check >= CHECK_INTERVAL


def save_check_state(path: str | os.PathLike[str], version: str) -> None:
    """Record that a check ran now and found ``version``."""
    state = {
        "last_check": datetime.now(timezone.utc).isoformat(),
        "version": version,
    }
    Path(path).write_text(json.dumps(state, indent=2), encoding="utf-8")


def get_latest_release_public() -> str:
    """Return the latest release tag, without a leading ``v``, from the public API.

    The repository, as ``owner/name``, is read from ``SAGE_RELEASE_REPO``.
    """
    repo = os.environ.get(RELEASE_REPO_ENV, "").strip()
    if not repo:
        raise LookupError(f"{RELEASE_REPO_ENV} is not set")
    request = urllib.request.Request(
        f"{GITHUB_API}/repos/{repo}/releases/latest",
        headers={"Accept": "application/vnd.github.v3+json", "User-Agent": "sage-cli"},
    )
    with urllib.request.urlopen(request, timeout=REQUEST_TIMEOUT) as response:
        body = response.read()
    release = json.loads(body)
    if not isinstance(release, dict):
        raise ValueError("unexpected release response")
    return str(release.get("tag_name", "")).removeprefix("v")


def _check(current_version: str, fetch_latest: Callable[[], str]) -> str | None:
    if current_version in ("dev", ""):
        return None
    try:
        config_path = get_config_path()
    except OSError:
        return None
    if not should_check(config_path):
        return None
    try:
        current = Version(current_version.removeprefix("v"))
    except InvalidVersion:
        return None
    try:
        latest_text = fetch_latest()
        latest = Version(latest_text)
    except Exception:
        return None
    try:
        save_check_state(config_path, latest_text)
    except OSError:
        pass
    if latest > current:
        info(f"A new version of sage is available: {current} → {latest}")
        info("To update, install the latest release of sage")
        print()
        return str(latest)
    return None


def check_for_updates(client: Any, current_version: str) -> str | None:
    """Announce a newer release found through ``client.get_latest_release()``.

    Returns the newer version when one was announced. Failures are silent.
    """
    return _check(current_version, client.get_latest_release)


def check_for_updates_public(current_version: str) -> str | None:
    """Announce a newer release found through the public API. Failures are silent."""
    return _check(current_version, get_latest_release_public)