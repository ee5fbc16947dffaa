import errno
import os
import shutil
import signal
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase, skipUnless
from unittest.mock import patch

from asshim.errors import SpawnError, WaitError
from asshim.launcher import (
    ABNORMAL_EXIT_CODE,
    EXEC_FAILED_EXIT_CODE,
    RESTORED_SIGNALS,
    exit_code_from_status,
    launch,
)

SH = "/bin/sh"


@skipUnless(os.path.exists(SH), "requires /bin/sh")
class TestLaunch(TestCase):
    def test_exit_code_propagated(self) -> None:
        for code in (0, 1, 2, 42, 255):
            with self.subTest(code=code):
                self.assertEqual(launch([SH, "-c", f"exit {code}"]), code)

    def test_signal(self) -> None:
        self.assertEqual(launch([SH, "-c", "kill -KILL $$"]), ABNORMAL_EXIT_CODE)

    def test_missing_program(self) -> None:
        with TemporaryDirectory(prefix="asshim-test") as d:
            missing = str(Path(d, "as"))
            self.assertEqual(launch([missing, "foo.s"]), EXEC_FAILED_EXIT_CODE)

    def test_not_executable(self) -> None:
        with TemporaryDirectory(prefix="asshim-test") as d:
            program = Path(d, "as")
            program.write_text("#!/bin/sh\nexit 0\n")
            program.chmod(0o644)
            self.assertEqual(launch([str(program)]), EXEC_FAILED_EXIT_CODE)

    def test_arguments_forwarded(self) -> None:
        self.assertEqual(
            launch([SH, "-c", 'test "$1" = "foo bar" && test "$2" = "-"', "sh", "foo bar", "-"]),
            0,
        )

    def test_explicit_environment(self) -> None:
        self.assertEqual(
            launch([SH, "-c", 'test "$ASSHIM_TEST" = yes'], {"ASSHIM_TEST": "yes"}),
            0,
        )

    def test_environment_inherited(self) -> None:
        with patch.dict(os.environ, {"ASSHIM_TEST": "inherited"}):
            self.assertEqual(launch([SH, "-c", 'test "$ASSHIM_TEST" = inherited']), 0)


@skipUnless(os.path.exists(SH) and os.path.exists("/proc/self/status"), "requires Linux procfs")
class TestLaunchSignalDispositions(TestCase):
    def test_default_dispositions(self) -> None:
        # Bits of SIGPIPE (13) and SIGXFSZ (25) in the SigIgn mask
        script = (
            'ign=$(sed -n "s/^SigIgn:[[:space:]]*//p" /proc/$$/status) && '
            'test $(( 0x$ign & 0x1001000 )) -eq 0'
        )
        self.assertEqual(launch([SH, "-c", script]), 0)

    @skipUnless(shutil.which("yes") and shutil.which("head"), "requires yes and head")
    def test_closed_pipe_kills_writer_quietly(self) -> None:
        script = 'err=$( { yes | head -n 1 >/dev/null; } 2>&1 ) && test -z "$err"'
        self.assertEqual(launch([SH, "-c", script]), 0)

    def test_restored_signals(self) -> None:
        self.assertIn(signal.SIGPIPE, RESTORED_SIGNALS)
        self.assertIn(signal.SIGXFSZ, RESTORED_SIGNALS)


class TestLaunchFailures(TestCase):
    def test_fork_failure(self) -> None:
        cause = OSError(errno.EAGAIN, "Resource temporarily unavailable")
        with patch("os.fork", side_effect=cause), patch("os.waitpid") as waitpid:
            with self.assertRaises(SpawnError) as ctx:
                launch(["/usr/bin/clang", "-c"])

        self.assertIs(ctx.exception.cause, cause)
        waitpid.assert_not_called()

    def test_wait_failure(self) -> None:
        cause = ChildProcessError(errno.ECHILD, "No child processes")
        with (
            patch("os.fork", return_value=4242),
            patch("os.waitpid", side_effect=cause) as waitpid,
        ):
            with self.assertRaises(WaitError) as ctx:
                launch(["/usr/bin/clang", "-c"])

        waitpid.assert_called_once_with(4242, 0)
        self.assertEqual(ctx.exception.pid, 4242)
        self.assertIs(ctx.exception.cause, cause)

    def test_interrupted_wait_reaps_child(self) -> None:
        with (
            patch("os.fork", return_value=4242),
            patch(
                "os.waitpid",
                side_effect=[KeyboardInterrupt(), (4242, signal.SIGINT)],
            ) as waitpid,
        ):
            with self.assertRaises(KeyboardInterrupt):
                launch(["/usr/bin/clang", "-c"])

        self.assertEqual(waitpid.call_count, 2)
        waitpid.assert_called_with(4242, 0)

    def test_status_mapped(self) -> None:
        with patch("os.fork", return_value=4242), patch("os.waitpid", return_value=(4242, 7 << 8)):
            self.assertEqual(launch(["/usr/bin/clang", "-c"]), 7)


class TestExitCodeFromStatus(TestCase):
    def test_normal_exit(self) -> None:
        for code in range(256):
            self.assertEqual(exit_code_from_status(code << 8), code)

    def test_signaled(self) -> None:
        for signal in (2, 6, 9, 11, 15):
            self.assertEqual(exit_code_from_status(signal), ABNORMAL_EXIT_CODE)

    def test_core_dumped(self) -> None:
        self.assertEqual(exit_code_from_status(0x80 | 11), ABNORMAL_EXIT_CODE)
