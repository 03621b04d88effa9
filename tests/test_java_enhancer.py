"""Subprocess-backed engine adapter.

Tests cover:
    - Command line built from engine, context, directories and packages
    - stdout lines -> on_info, stderr lines -> on_error
    - Lines reach the listener while the engine is still running, in arrival order
    - Non-zero exit and a missing executable raise TransformError
"""

import sys
import textwrap
from pathlib import Path

import pytest

from adapters import java_enhancer
from conftest import FakePopen
from adapters.java_enhancer import JavaOfflineFileTransform, JavaTransformEngine, engine_factory_from_settings
from core.config import AppSettings
from core.domain.errors import TransformError


class RecordingListener:
    def __init__(self):
        self.infos = []
        self.errors = []

    def on_info(self, message):
        self.infos.append(message)

    def on_error(self, message):
        self.errors.append(message)


def _make_driver(**engine_kwargs):
    engine = JavaTransformEngine(classpath="/repo/a.jar;target/classes", **engine_kwargs)
    return JavaOfflineFileTransform(engine, "/opt/enhancer.jar", Path("target/classes"), Path("target/out"))


def _fake_popen(monkeypatch, **kwargs):
    calls = []
    monkeypatch.setattr(java_enhancer.subprocess, "Popen", FakePopen(calls, **kwargs))
    return calls


def test_command_line(monkeypatch):
    calls = _fake_popen(monkeypatch)
    driver = _make_driver(transform_args="debug=1")
    driver.process("com.acme.entity.**,com.acme.meta.*")

    command, kwargs = calls[0]
    assert command == [
        "java",
        "-cp",
        "/opt/enhancer.jar",
        "com.avaje.ebean.enhance.ant.MainTransform",
        "--classpath",
        "/repo/a.jar;target/classes",
        "--source",
        "target/classes",
        "--destination",
        "target/out",
        "--transform-args",
        "debug=1",
        "--packages",
        "com.acme.entity.**,com.acme.meta.*",
    ]
    assert kwargs["stdout"] is java_enhancer.subprocess.PIPE
    assert kwargs["stderr"] is java_enhancer.subprocess.PIPE


def test_optional_arguments_are_left_out():
    engine = JavaTransformEngine(classpath="target/classes")
    driver = JavaOfflineFileTransform(engine, None, Path("target/classes"), Path("target/classes"))
    command = driver.build_command(None)
    assert "-cp" not in command
    assert "--transform-args" not in command
    assert "--packages" not in command


def test_output_is_bridged_to_listener(monkeypatch):
    _fake_popen(monkeypatch, stdout="enhanced Order\n\nenhanced Customer\n", stderr="skipped Broken\n")
    driver = _make_driver()
    listener = RecordingListener()
    driver.set_listener(listener)
    driver.process("com.acme.*")
    assert listener.infos == ["enhanced Order", "enhanced Customer"]
    assert listener.errors == ["skipped Broken"]


def test_non_zero_exit_raises(monkeypatch):
    _fake_popen(monkeypatch, returncode=3, stderr="warming up\nError transforming Foo\n")
    driver = _make_driver()
    with pytest.raises(TransformError) as excinfo:
        driver.process("com.acme.*")
    assert str(excinfo.value) == "Error transforming Foo"
    assert excinfo.value.returncode == 3


def test_missing_executable_raises(monkeypatch):
    def popen(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr(java_enhancer.subprocess, "Popen", popen)
    driver = _make_driver(java_executable="/nope/java")
    with pytest.raises(TransformError):
        driver.process("com.acme.*")


def _run_script(monkeypatch, tmp_path, source, listener):
    driver = JavaOfflineFileTransform(JavaTransformEngine(classpath="cp"), None, tmp_path, tmp_path)
    monkeypatch.setattr(driver, "build_command", lambda packages: [sys.executable, "-c", textwrap.dedent(source)])
    driver.set_listener(listener)
    driver.process(None)


def test_interleaved_output_keeps_arrival_order(monkeypatch, tmp_path):
    source = """
        import sys, time
        print("enhanced Order", flush=True)
        time.sleep(0.2)
        print("skipped Broken", file=sys.stderr, flush=True)
        time.sleep(0.2)
        print("enhanced Customer", flush=True)
    """
    events = []

    class Listener:
        def on_info(self, message):
            events.append(("info", message))

        def on_error(self, message):
            events.append(("error", message))

    _run_script(monkeypatch, tmp_path, source, Listener())
    assert events == [("info", "enhanced Order"), ("error", "skipped Broken"), ("info", "enhanced Customer")]


def test_lines_arrive_while_engine_runs(monkeypatch, tmp_path):
    # The script only prints its second line once the listener has seen the first.
    flag = tmp_path / "seen"
    source = f"""
        import os, time
        print("waiting", flush=True)
        deadline = time.time() + 5
        while not os.path.exists({str(flag)!r}) and time.time() < deadline:
            time.sleep(0.05)
        print("seen" if os.path.exists({str(flag)!r}) else "timeout", flush=True)
    """
    listener = RecordingListener()
    original = listener.on_info

    def on_info(message):
        original(message)
        if message == "waiting":
            flag.touch()

    listener.on_info = on_info
    _run_script(monkeypatch, tmp_path, source, listener)
    assert listener.infos == ["waiting", "seen"]


def test_engine_factory_uses_settings():
    settings = AppSettings(java_executable="/usr/lib/jvm/bin/java", enhancer_main_class="org.example.Main")
    engine = engine_factory_from_settings(settings)("cp", "debug=2")
    assert engine == JavaTransformEngine(
        classpath="cp",
        transform_args="debug=2",
        java_executable="/usr/lib/jvm/bin/java",
        main_class="org.example.Main",
    )
