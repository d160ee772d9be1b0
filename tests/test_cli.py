import subprocess
import sys
from pathlib import Path

def run(cmd, cwd, env=None):
    return subprocess.run(cmd, cwd=cwd, shell=True, check=False, capture_output=True, text=True, env=env)

REPO = Path(__file__).resolve().parents[1]
PY = sys.executable

def test_dump_synthetic_logfile(tmp_path):
    log = tmp_path / "ib_logfile0"

    r = run(f"{PY} tools/synth_logfile.py {log} --blocks 3", cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout
    assert log.stat().st_size == 2048 + 3 * 512

    r = run(f"{PY} -m redo_dump.cli {log}", cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout
    assert f"{log} opened" in r.stdout
    assert "Current position: 2048" in r.stdout
    assert "Magic         : 0x55E7718B (fsp limit present)" in r.stdout
    assert "Log block #2 at offset 3072" in r.stdout
    assert "Log block #3" not in r.stdout
    assert r.stdout.count("Is first block    : True") == 1

def test_torn_tail_stops_cleanly(tmp_path):
    log = tmp_path / "ib_logfile0"
    r = run(f"{PY} tools/synth_logfile.py {log} --blocks 3", cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout

    r = run(f"{PY} scripts/truncate_tail.py {log} 100", cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout

    r = run(f"{PY} -m redo_dump.cli {log}", cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout
    assert "Log block #1 at offset 2560" in r.stdout
    assert "Log block #2" not in r.stdout
    assert "Truncated log block at offset 3072" in r.stderr

def test_missing_file_is_fatal(tmp_path):
    r = run(f"{PY} -m redo_dump.cli {tmp_path / 'missing'}", cwd=REPO)
    assert r.returncode == 1
    assert r.stdout == ""
    assert "FATAL: Cannot open log file" in r.stderr

def test_strict_rejects_truncated_checkpoint(tmp_path):
    log = tmp_path / "ib_logfile0"
    log.write_bytes(bytes(700))

    r = run(f"{PY} -m redo_dump.cli {log}", cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout
    assert "Truncated first checkpoint" in r.stderr

    r = run(f"{PY} -m redo_dump.cli --strict {log}", cwd=REPO)
    assert r.returncode == 1
    assert "FATAL: Short read: expected 512 bytes at offset 512, got 188" in r.stderr

def test_logfile_from_environment(tmp_path):
    import os
    log = tmp_path / "ib_logfile0"
    r = run(f"{PY} tools/synth_logfile.py {log} --blocks 1", cwd=REPO)
    assert r.returncode == 0, r.stderr + r.stdout

    env = dict(os.environ, REDO_LOGFILE=str(log))
    r = run(f"{PY} -m redo_dump.cli", cwd=REPO, env=env)
    assert r.returncode == 0, r.stderr + r.stdout
    assert "Log block #0 at offset 2048" in r.stdout

def test_stream_error_is_fatal(tmp_path, monkeypatch):
    from click.testing import CliRunner
    from redo_dump import cli
    from redo_dump.streams import StreamError

    def failing_dump(path, echo, strict=False):
        echo(f"{path} opened")
        raise StreamError("[Errno 5] Input/output error")

    monkeypatch.setattr(cli, "dump_path", failing_dump)
    r = CliRunner().invoke(cli.main, [str(tmp_path / "ib_logfile0")])
    assert r.exit_code == 1
    assert "FATAL: I/O error while reading log file: [Errno 5] Input/output error" in r.output
