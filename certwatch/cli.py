from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError

from certwatch.check import CheckResult, Verdict, check_certificate
from certwatch.config import Settings, load_settings
from certwatch.runtime_logging import write_run_log

# legacy: the historical certwatch(1) convention used by cron scripts,
#   0 when a warning is due, 1 for no warning and for errors.
# status: 0 no warning, 10 warning due, 30 error.
_EXIT_CODES = {
    "legacy": {Verdict.WARNING_DUE: 0, Verdict.NO_WARNING: 1, Verdict.ERROR: 1},
    "status": {Verdict.NO_WARNING: 0, Verdict.WARNING_DUE: 10, Verdict.ERROR: 30},
}


def exit_code_for(result: CheckResult, exit_mode: str) -> int:
    return _EXIT_CODES[exit_mode][result.verdict]


def _settings_from_options(**options) -> Settings:
    config_file = options.pop("config_file")
    try:
        return load_settings(config_file, overrides=options)
    except ValidationError as exc:
        raise typer.BadParameter(_first_error(exc)) from exc
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err["loc"])
    return f"{loc}: {err['msg']}"


app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def certwatch(
    certificate: Path = typer.Argument(..., help="PEM certificate file to check"),
    address: str | None = typer.Option(
        None, "--address", "-a", help="Recipient address [root]"
    ),
    period: int | None = typer.Option(
        None, "--period", "-p", help="Number of days before expiry [30]"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Enable quiet mode"),
    config_file: str | None = typer.Option(
        None,
        "--config-file",
        "-c",
        help="Settings file (.toml/.yaml)",
        envvar="CERTWATCH_CONFIG_FILE",
    ),
    exit_mode: str | None = typer.Option(
        None,
        "--exit-mode",
        help="Exit status convention: legacy (0 = warning due) or status (0/10/30)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
):
    """Warn when a certificate is not yet valid, expired or about to expire.

    The warning is printed as a mail (To/Subject headers and body) suitable
    for piping to sendmail.
    """

    settings = _settings_from_options(
        config_file=config_file,
        warn_address=address,
        warn_period=period,
        quiet=quiet or None,
        exit_mode=exit_mode,
    )

    result = check_certificate(certificate, settings)
    code = exit_code_for(result, settings.exit_mode)

    if settings.log_dir:
        payload = {"warn_period": settings.warn_period, "exit_code": code}
        payload.update(result.to_dict())
        write_run_log(Path(settings.log_dir), "check", payload)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    elif result.verdict is Verdict.ERROR:
        if not settings.quiet:
            typer.echo(f"certwatch: {result.error}", err=True)
    elif result.message is not None:
        typer.echo(result.message.as_text(), nl=False)

    raise typer.Exit(code=code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
