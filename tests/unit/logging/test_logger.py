import io

import msgspec
import pytest

from happy.logging import Logger, LoggingConfig
from happy.logging.happy_logging_models import (
    LockWarning,
    ResolutionError,
    RoundDebug,
)


def create_resolution_error():
    return ResolutionError(
        message="Name or service not known (skipping a.test port 80)",
        host="a.test",
        port="80",
        error="Name or service not known",
    )


class TestLogger:
    @pytest.mark.asyncio
    async def test_writes_template_to_stderr(self):
        stderr = io.StringIO()
        logger = Logger(stderr=stderr)
        logger.configure(name="happy", template="happy: {message}")

        await logger.log(create_resolution_error(), name="happy")

        assert stderr.getvalue() == (
            "happy: Name or service not known (skipping a.test port 80)\n"
        )

    @pytest.mark.asyncio
    async def test_template_fields(self):
        stderr = io.StringIO()
        logger = Logger(stderr=stderr)
        logger.configure(name="happy", template="{level} {call}: {error}")

        await logger.log(
            LockWarning(
                message="fcntl: No locks available (ignored)",
                call="fcntl",
                error="No locks available",
            ),
            name="happy",
        )

        assert stderr.getvalue() == "WARN fcntl: No locks available\n"

    @pytest.mark.asyncio
    async def test_respects_output_stream(self):
        stdout = io.StringIO()
        stderr = io.StringIO()
        logger = Logger(stdout=stdout, stderr=stderr)
        logger.configure(name="happy", template="{message}")

        LoggingConfig().update(log_output="stdout")

        await logger.log(create_resolution_error(), name="happy")

        assert stderr.getvalue() == ""
        assert "skipping a.test port 80" in stdout.getvalue()

    @pytest.mark.asyncio
    async def test_filters_below_level(self):
        stderr = io.StringIO()
        logger = Logger(stderr=stderr)
        logger.configure(name="happy", template="{message}")

        await logger.log(
            RoundDebug(
                message="round 1 of 3 launched 2 endpoints",
                round=1,
                rounds=3,
                launched=2,
            ),
            name="happy",
        )

        assert stderr.getvalue() == ""

        LoggingConfig().update(log_level="debug")

        await logger.log(
            RoundDebug(
                message="round 1 of 3 launched 2 endpoints",
                round=1,
                rounds=3,
                launched=2,
            ),
            name="happy",
        )

        assert stderr.getvalue() == "round 1 of 3 launched 2 endpoints\n"

    @pytest.mark.asyncio
    async def test_disabled_logger_is_silent(self):
        stderr = io.StringIO()
        logger = Logger(stderr=stderr)
        logger.configure(name="quiet", template="{message}")

        config = LoggingConfig()
        config.disable("quiet")

        assert config.enabled("quiet", create_resolution_error().level) is False

        await logger.log(create_resolution_error(), name="quiet")

        assert stderr.getvalue() == ""

    @pytest.mark.asyncio
    async def test_writes_json_lines_to_file(self, tmp_path):
        logfile = tmp_path / "logs" / "happy.json"
        stderr = io.StringIO()

        logger = Logger(stderr=stderr)
        logger.configure(name="happy", template="happy: {message}", path=str(logfile))

        await logger.log(create_resolution_error(), name="happy")
        await logger.log(create_resolution_error(), name="happy")
        await logger.close()

        records = [
            msgspec.json.decode(line)
            for line in logfile.read_bytes().splitlines()
        ]

        assert len(records) == 2
        assert records[0]["entry"]["host"] == "a.test"
        assert records[0]["entry"]["level"] == "ERROR"
        assert records[0]["function_name"] == "test_writes_json_lines_to_file"
        assert stderr.getvalue().count("happy: Name or service not known") == 2

    @pytest.mark.asyncio
    async def test_filtered_entries_skip_file(self, tmp_path):
        logfile = tmp_path / "happy.json"

        logger = Logger(stderr=io.StringIO())
        logger.configure(name="happy", path=str(logfile))

        await logger.log(
            RoundDebug(
                message="round 1 of 3 launched 2 endpoints",
                round=1,
                rounds=3,
                launched=2,
            ),
            name="happy",
        )
        await logger.close()

        assert logfile.exists() is False


class TestLoggingConfig:
    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            LoggingConfig().update(log_level="loud")

    def test_updates_level(self):
        config = LoggingConfig()
        config.update(log_level="error")

        assert config.level.value == "ERROR"
