"""
Pytest configuration and shared fixtures.
"""
import json
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


SCREENSHOT_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256))
UI_DUMP_XML = '<?xml version="1.0" encoding="UTF-8"?><hierarchy rotation="0"><node text="Hello" /></hierarchy>'

# Emulates the adb subcommands the tools use. Device storage lives under
# FAKE_ADB_ROOT; every invocation's argv is appended to FAKE_ADB_CALLS.
FAKE_ADB_SOURCE = '''
import json
import os
import shutil
import subprocess
import sys
import time

SCREENSHOT = __SCREENSHOT__
UI_DUMP = __UI_DUMP__

root = os.environ["FAKE_ADB_ROOT"]
args = sys.argv[1:]
with open(os.environ["FAKE_ADB_CALLS"], "a", encoding="utf-8") as f:
    f.write(json.dumps(args) + "\\n")

if args[:1] == ["-s"]:
    args = args[2:]


def device_path(remote):
    return os.path.join(root, remote.lstrip("/"))


def write_device_file(remote, data):
    path = device_path(remote)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


def finish(code=0):
    stderr = os.environ.get("FAKE_ADB_STDERR")
    if stderr:
        sys.stderr.write(stderr + "\\n")
    sys.stdout.flush()
    sys.exit(int(os.environ.get("FAKE_ADB_EXIT", code)))


cmd = args[0] if args else ""
if cmd == "version":
    print("Android Debug Bridge version 1.0.41")
    print("Version 35.0.2-12147458")
elif cmd == "devices":
    print("List of devices attached")
    print("emulator-5554\\tdevice" + (" product:sdk_gphone64 model:Pixel_7" if "-l" in args else ""))
    print()
elif cmd == "install":
    print("Performing Streamed Install")
    print("Success")
elif cmd == "logcat":
    for i in range(1, 101):
        print(f"I/FakeTag( {i}): line {i}")
elif cmd == "pull":
    src = device_path(args[1])
    if not os.path.exists(src):
        sys.stderr.write(f"adb: error: failed to stat remote object '{args[1]}': No such file or directory\\n")
        sys.exit(1)
    shutil.copyfile(src, args[2])
    print(f"{args[1]}: 1 file pulled, 0 skipped.")
elif cmd == "push":
    with open(args[1], "rb") as f:
        write_device_file(args[2], f.read())
    print(f"{args[1]}: 1 file pushed, 0 skipped.")
elif cmd == "shell":
    words = args[1:]
    if words[:2] == ["screencap", "-p"]:
        write_device_file(words[2], SCREENSHOT)
    elif words[:2] == ["uiautomator", "dump"]:
        write_device_file(words[2], UI_DUMP.encode("utf-8"))
        print(f"UI hierchary dumped to: {words[2]}")
    elif words[:1] == ["rm"]:
        os.remove(device_path(words[1]))
    elif words[:1] in (["am"], ["pm"]):
        print("args: " + json.dumps(words))
    elif words and words[0].startswith("sleep "):
        # In-process so a kill leaves no child holding the pipes
        time.sleep(float(words[0].split()[1]))
    else:
        finish(subprocess.run(["sh", "-c", " ".join(words)]).returncode)
else:
    sys.stderr.write(f"adb: unknown command {cmd}\\n")
    sys.exit(1)
finish()
'''


@dataclass
class FakeAdb:
    """Handle on the fake adb executable and its device storage."""
    path: Path
    root: Path
    calls_file: Path

    def calls(self) -> list[list[str]]:
        """argv of every invocation so far."""
        if not self.calls_file.exists():
            return []
        return [json.loads(line) for line in self.calls_file.read_text(encoding="utf-8").splitlines()]

    def device_file(self, remote: str) -> Path:
        return self.root / remote.lstrip("/")


# =============================================================================
# ADB fixtures
# =============================================================================

@pytest.fixture
def fake_adb(tmp_path, monkeypatch):
    """Provide a fake adb executable backed by a temp directory."""
    if sys.platform == "win32":
        pytest.skip("fake adb relies on a POSIX shell")

    script = tmp_path / "fake_adb.py"
    script.write_text(
        FAKE_ADB_SOURCE.replace("__SCREENSHOT__", repr(SCREENSHOT_BYTES)).replace(
            "__UI_DUMP__", repr(UI_DUMP_XML)
        ),
        encoding="utf-8",
    )
    wrapper = tmp_path / "adb"
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n', encoding="utf-8")
    wrapper.chmod(0o755)

    root = tmp_path / "device"
    root.mkdir()
    calls = tmp_path / "calls.jsonl"

    monkeypatch.setenv("FAKE_ADB_ROOT", str(root))
    monkeypatch.setenv("FAKE_ADB_CALLS", str(calls))
    monkeypatch.delenv("FAKE_ADB_STDERR", raising=False)
    monkeypatch.delenv("FAKE_ADB_EXIT", raising=False)
    return FakeAdb(path=wrapper, root=root, calls_file=calls)


@pytest.fixture
def staging_dir(tmp_path, monkeypatch):
    """Redirect the system temp directory so staged files can be inspected."""
    staging = tmp_path / "staging"
    staging.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(staging))
    return staging


@pytest.fixture
def runner(fake_adb):
    """Provide a runner pointed at the fake adb."""
    from adb_mcp.adb import AdbRunner
    return AdbRunner(adb_path=str(fake_adb.path))


@pytest.fixture
def handlers(runner, staging_dir):
    """Provide tool handlers using the fake adb."""
    from adb_mcp.tools import AdbToolHandlers
    return AdbToolHandlers(runner)


@pytest.fixture
def screenshot_bytes():
    """PNG bytes the fake adb writes for screencap."""
    return SCREENSHOT_BYTES


@pytest.fixture
def ui_dump_xml():
    """XML the fake adb writes for uiautomator dump."""
    return UI_DUMP_XML
