import asyncio
import sys

import click
import uvloop
from pydantic import ValidationError

from happy.core.errors import ProbeFatalError
from happy.core.models import ProbeConfig
from happy.env import Env, load_env
from happy.logging import Logger, LoggingConfig
from happy.logging.happy_logging_models import ProbeFatal
from happy.probe import HappyProbe

from .targets import load_hostnames


DIAGNOSTIC_TEMPLATE = "happy: {message}"


async def run_probe(
    config: ProbeConfig,
    hostnames: list[str],
    ports: list[str],
    logger: Logger,
) -> int:
    probe = HappyProbe(config, logger=logger)

    try:
        await probe.run(hostnames, ports)

    except ProbeFatalError as err:
        await logger.log(
            ProbeFatal(
                message=str(err),
                error=str(err),
            ),
            name="happy",
        )

        return 1

    finally:
        await logger.close()

    return 0


def build_config(
    env: Env,
    queries: int | None,
    timeout: int | None,
    delay: int | None,
    sort: bool,
    machine: bool,
) -> ProbeConfig:
    try:
        return ProbeConfig(
            queries=queries if queries is not None else env.HAPPY_QUERIES,
            timeout=timeout if timeout is not None else env.HAPPY_TIMEOUT,
            delay=delay if delay is not None else env.HAPPY_DELAY,
            sort=sort,
            machine=machine,
        )

    except ValidationError as err:
        error = err.errors()[0]
        option = "/".join(str(location) for location in error["loc"])

        raise click.BadParameter(
            error["msg"],
            param_hint=f"'--{option}'",
        )


@click.command(
    help="Measure TCP connection setup times to every address of the given hostnames.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("hostnames", nargs=-1)
@click.option(
    "-p",
    "--port",
    "ports",
    multiple=True,
    help="Port or service name to probe. May be repeated. Defaults to 80.",
)
@click.option(
    "-q",
    "--queries",
    type=int,
    default=None,
    help="Number of measurement rounds (default 3).",
)
@click.option(
    "-t",
    "--timeout",
    type=int,
    default=None,
    help="Per-connection timeout in milliseconds, 0 waits indefinitely (default 2000).",
)
@click.option(
    "-d",
    "--delay",
    type=int,
    default=None,
    help="Delay between connection launches in milliseconds (default 25).",
)
@click.option(
    "-f",
    "--file",
    "files",
    type=click.File("r"),
    multiple=True,
    help="Read hostnames from a file, one per line. Use '-' for standard input.",
)
@click.option(
    "-s",
    "--sort",
    is_flag=True,
    default=False,
    help="Sort endpoints by mean connection time.",
)
@click.option(
    "-m",
    "--machine",
    is_flag=True,
    default=False,
    help="Produce semicolon separated machine readable output.",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["trace", "debug", "info", "warn", "error", "critical", "fatal"],
        case_sensitive=False,
    ),
    default=None,
    help="Diagnostic log level.",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a .env file with HAPPY_* defaults.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also append diagnostics to this file as JSON lines.",
)
def happy(
    hostnames: tuple[str, ...],
    ports: tuple[str, ...],
    queries: int | None,
    timeout: int | None,
    delay: int | None,
    files: tuple,
    sort: bool,
    machine: bool,
    log_level: str | None,
    env_file: str | None,
    log_file: str | None,
):
    try:
        env = load_env(Env, env_file=env_file)

    except (ValueError, ValidationError) as err:
        raise click.UsageError(f"invalid environment: {err}")

    config = build_config(
        env,
        queries,
        timeout,
        delay,
        sort,
        machine,
    )

    logging_config = LoggingConfig()

    try:
        logging_config.update(
            log_level=log_level or env.HAPPY_LOG_LEVEL,
            log_output=env.HAPPY_LOG_OUTPUT,
        )

    except ValueError as err:
        raise click.UsageError(str(err))

    logger = Logger()
    logger.configure(
        name="happy",
        template=DIAGNOSTIC_TEMPLATE,
        path=log_file or env.HAPPY_LOG_FILE,
    )

    probe_ports = list(ports) or [env.HAPPY_DEFAULT_PORT]
    probe_hostnames = [
        *load_hostnames(files),
        *hostnames,
    ]

    status = uvloop.run(
        run_probe(
            config,
            probe_hostnames,
            probe_ports,
            logger,
        )
    )

    if status:
        sys.exit(status)


def run():
    try:
        happy()

    except (
        KeyboardInterrupt,
        asyncio.CancelledError,
    ):
        sys.exit(1)
