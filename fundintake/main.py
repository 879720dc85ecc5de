import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from fundintake.address.factory import AddressNormalizerFactory
from fundintake.address.models import AddressNormalizationResult
from fundintake.config.settings import Settings
from fundintake.content.exceptions import ContentError, ContentNetworkError
from fundintake.content.factory import ContentGeneratorFactory
from fundintake.database.connection import close_pool
from fundintake.documents.exceptions import DocumentError
from fundintake.documents.factory import DocumentLoaderFactory
from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.controller import DraftPersistController
from fundintake.drafts.exceptions import DraftError
from fundintake.drafts.factory import DraftStoreFactory
from fundintake.drafts.models import ControllerState
from fundintake.extraction.diligence_parser import FounderDiligenceParser
from fundintake.extraction.memo_parser import InvestmentMemoParser
from fundintake.extraction.models import ExtractionResult
from fundintake.forms.session import INVESTMENT_WIZARD_KEY, IntakeSession, build_intake_session
from fundintake.forms.submission import submit_investment
from fundintake.logging.logger import Log
from fundintake.notifications.log_notifier import LogNotifier

GENERATORS = {
    "tagline": "generate_tagline",
    "industry-tags": "generate_industry_tags",
    "business-model-tags": "generate_business_model_tags",
}


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _address_payload(address: AddressNormalizationResult) -> dict[str, Any]:
    return {
        "method": address.method.value,
        "needs_review": address.needs_review,
        "confidence": address.confidence,
        "fields": {
            "line1": address.fields.line1,
            "city": address.fields.city,
            "state": address.fields.state,
            "zip": address.fields.zip,
            "country": address.fields.country,
            "latitude": address.fields.latitude,
            "longitude": address.fields.longitude,
        },
    }


def _result_payload(result: ExtractionResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "fields": result.form_values(),
        "successfully_parsed": sorted(field.value for field in result.successfully_parsed),
        "failed_to_parse": sorted(field.value for field in result.failed_to_parse),
    }
    if result.address_normalization is not None:
        payload["address_normalization"] = _address_payload(result.address_normalization)
    return payload


def _read_source(settings: Settings, source: str) -> str:
    loader = DocumentLoaderFactory.create(settings)
    try:
        if source == "-":
            return loader.load_stream(sys.stdin.buffer)
        return loader.load_path(Path(source))
    except DocumentError as exc:
        raise click.ClickException(str(exc)) from exc


async def _parse_diligence(settings: Settings, text: str) -> ExtractionResult:
    normalizer = AddressNormalizerFactory.create(settings)
    try:
        return await FounderDiligenceParser(normalizer).parse(text)
    finally:
        await normalizer.aclose()


async def _normalize_address(settings: Settings, text: str) -> AddressNormalizationResult:
    normalizer = AddressNormalizerFactory.create(settings)
    try:
        return await normalizer.normalize(text)
    finally:
        await normalizer.aclose()


def _persistent_store(settings: Settings) -> BaseDraftStore:
    if settings.draft_store.lower() == "memory":
        raise click.ClickException(
            "The memory draft store does not outlive one command; "
            "set DRAFT_STORE to 'file' or 'postgres'"
        )
    try:
        return DraftStoreFactory.create(settings)
    except DraftError as exc:
        raise click.ClickException(str(exc)) from exc


async def _settle(drafts: DraftPersistController, poll_seconds: float = 0.05) -> bool:
    """Drive the debounced save until nothing is pending. True if it wrote."""
    saved = False
    while drafts.has_pending_save and drafts.state is ControllerState.WATCHING:
        await asyncio.sleep(poll_seconds)
        saved = drafts.tick() or saved
    return saved


async def _paste_and_save(
    session: IntakeSession, kind: str, text: str
) -> tuple[ExtractionResult, bool]:
    try:
        if kind == "memo":
            result = session.quick_paste.paste_memo(session.form, text)
        else:
            result = await session.quick_paste.paste_diligence(session.form, text)
        saved = await _settle(session.drafts)
    finally:
        await session.aclose()
    return result, saved


def _validation_message(exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return "Draft is not ready to submit:\n  " + "\n  ".join(problems)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Quick-paste intake tools for the portfolio admin."""
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)
    ctx.obj = settings


@cli.command("parse-memo")
@click.argument("source", default="-")
@click.pass_obj
def parse_memo(settings: Settings, source: str) -> None:
    """Parse an investment memo (text or PDF file, '-' for stdin)."""
    text = _read_source(settings, source)
    _echo_json(_result_payload(InvestmentMemoParser().parse(text)))


@cli.command("parse-diligence")
@click.argument("source", default="-")
@click.pass_obj
def parse_diligence(settings: Settings, source: str) -> None:
    """Parse a founder diligence note, normalizing its HQ address."""
    text = _read_source(settings, source)
    _echo_json(_result_payload(asyncio.run(_parse_diligence(settings, text))))


@cli.command("normalize-address")
@click.argument("text")
@click.pass_obj
def normalize_address(settings: Settings, text: str) -> None:
    """Normalize a free-text address through geocoder, grammar and fallback."""
    _echo_json(_address_payload(asyncio.run(_normalize_address(settings, text))))


@cli.command("generate")
@click.argument("kind", type=click.Choice(sorted(GENERATORS)))
@click.argument("source", default="-")
@click.pass_obj
def generate(settings: Settings, kind: str, source: str) -> None:
    """Generate a tagline or tag suggestions from a pitch transcript."""
    transcript = _read_source(settings, source)
    try:
        generator = ContentGeneratorFactory.create(settings)
        result = getattr(generator, GENERATORS[kind])(transcript)
    except ContentNetworkError as exc:
        raise click.ClickException(f"{exc} (temporary, try again)") from exc
    except (ContentError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json({kind.replace("-", "_"): result})


@cli.command("paste")
@click.argument("kind", type=click.Choice(["memo", "diligence"]))
@click.argument("source", default="-")
@click.option("--form-key", default=INVESTMENT_WIZARD_KEY, show_default=True)
@click.pass_obj
def paste(settings: Settings, kind: str, source: str, form_key: str) -> None:
    """Quick-paste a memo or diligence note into the stored wizard draft."""
    text = _read_source(settings, source)
    try:
        session = build_intake_session(
            settings,
            notifier=LogNotifier(),
            form_key=form_key,
            store=_persistent_store(settings),
        )
        result, saved = asyncio.run(_paste_and_save(session, kind, text))
    finally:
        close_pool()
    payload = _result_payload(result)
    payload["form_key"] = form_key
    payload["draft_saved"] = saved
    _echo_json(payload)


@cli.command("submit")
@click.option("--form-key", default=INVESTMENT_WIZARD_KEY, show_default=True)
@click.pass_obj
def submit(settings: Settings, form_key: str) -> None:
    """Validate the stored wizard draft and remove it once it passes."""
    try:
        session = build_intake_session(
            settings,
            notifier=LogNotifier(),
            form_key=form_key,
            store=_persistent_store(settings),
        )
        try:
            submission = submit_investment(session.form, session.drafts)
        except ValidationError as exc:
            raise click.ClickException(_validation_message(exc)) from exc
        finally:
            asyncio.run(session.aclose())
    finally:
        close_pool()
    _echo_json(submission.model_dump(mode="json"))


@cli.group()
def draft() -> None:
    """Inspect or remove stored form drafts."""


@draft.command("show")
@click.argument("key")
@click.pass_obj
def draft_show(settings: Settings, key: str) -> None:
    try:
        record = _persistent_store(settings).load(key)
    except DraftError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        close_pool()
    if record is None:
        raise click.ClickException(f"No draft stored for '{key}'")
    _echo_json({"form_key": record.form_key, "saved_at": record.saved_at, "data": record.data})


@draft.command("clear")
@click.argument("key")
@click.pass_obj
def draft_clear(settings: Settings, key: str) -> None:
    try:
        _persistent_store(settings).remove(key)
    except DraftError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        close_pool()
    _echo_json({"form_key": key, "cleared": True})


if __name__ == "__main__":
    cli()
