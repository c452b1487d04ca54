import json
import os
import queue
import subprocess
import sys
import threading
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SERVER_CMD = [sys.executable, "-u", str(ROOT / "scripts" / "mcp_stdio_server.py")]


def _start_server(extra_env=None):
    env = {**os.environ, **(extra_env or {})}
    proc = subprocess.Popen(
        SERVER_CMD,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        cwd=ROOT,
        env=env,
    )
    out_queue: "queue.Queue[str]" = queue.Queue()

    def _reader():
        for line in proc.stdout:
            out_queue.put(line)

    threading.Thread(target=_reader, daemon=True).start()
    return proc, out_queue


def _send(proc, message):
    raw = message if isinstance(message, str) else json.dumps(message)
    proc.stdin.write(raw + "\n")
    proc.stdin.flush()


def _read(out_queue, timeout=2.0):
    try:
        return out_queue.get(timeout=timeout)
    except queue.Empty:
        return None


def _stop(proc):
    if proc.stdin:
        proc.stdin.close()
    try:
        return proc.wait(timeout=2.0)
    except subprocess.TimeoutExpired:
        proc.kill()
        return None


def test_stdio_protocol_roundtrip():
    proc, out_queue = _start_server()
    try:
        _send(proc, {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2025-06-18"}})
        init_line = _read(out_queue)
        assert init_line is not None, "initialize response missing"
        init_resp = json.loads(init_line)
        assert init_resp["id"] == 1
        assert init_resp["result"]["protocolVersion"] == "2025-06-18"

        _send(proc, {"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert _read(out_queue, timeout=0.3) is None, "notification should not produce output"

        _send(
            proc,
            {
                "jsonrpc": "2.0",
                "id": 2,
                "method": "tools/call",
                "params": {"name": "create_task", "arguments": {"text": "Buy milk"}},
            },
        )
        created = json.loads(_read(out_queue))
        assert created["id"] == 2
        assert created["result"]["content"][0]["text"] == 'Task created successfully: "Buy milk"'

        _send(proc, "this is not json")
        bad = json.loads(_read(out_queue))
        assert bad["id"] is None
        assert bad["error"]["code"] == -32700

        _send(proc, {"jsonrpc": "2.0", "id": "r", "method": "resources/read", "params": {"uri": "todo://tasks"}})
        tasks = json.loads(json.loads(_read(out_queue))["result"]["contents"][0]["text"])
        assert [t["text"] for t in tasks] == ["Buy milk"]

        time.sleep(0.1)
        assert _read(out_queue, timeout=0.2) is None, "unexpected extra output on stdout"
    finally:
        returncode = _stop(proc)
    assert returncode == 0


def test_logs_stay_off_stdout():
    proc, out_queue = _start_server({"LOG_LEVEL": "DEBUG"})
    try:
        _send(proc, {"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
        line = _read(out_queue)
        assert line is not None
        assert len(json.loads(line)["result"]["tools"]) == 7
        time.sleep(0.1)
        assert _read(out_queue, timeout=0.2) is None
    finally:
        _stop(proc)
