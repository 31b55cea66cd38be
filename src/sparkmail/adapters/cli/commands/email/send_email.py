"""The ``send-email`` command: compose a message and deliver it via SparkPost."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from sparkmail.adapters.sparkpost.helpers import mark_transactional, tag
from sparkmail.adapters.sparkpost.transport import TransmissionResponse
from sparkmail.domain.email import Address, Email, new_email, put_attachment

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ...exit_codes import ExitCode
from ._common import (
    apply_validated_overrides,
    execute_with_delivery_error_handling,
    filter_sentinels,
    handle_validation_error,
    parse_address,
    parse_request_header,
    require_sender,
)

logger = logging.getLogger(__name__)


def compose_email(
    *,
    sender: Address,
    to: list[str],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    body: str,
    body_html: str,
    reply_to: str | None,
    attachments: tuple[str, ...],
    tags: tuple[str, ...],
    transactional: bool,
) -> Email:
    """Build the Email from CLI option values.

    Empty bodies are left unset rather than sent as empty strings.

    Raises:
        FileNotFoundError: When an attachment path does not exist.
    """
    email = new_email(
        sender=sender,
        to=[parse_address(v) for v in to],
        cc=[parse_address(v) for v in cc],
        bcc=[parse_address(v) for v in bcc],
        subject=subject,
        text_body=body or None,
        html_body=body_html or None,
        headers={"Reply-To": reply_to} if reply_to else None,
    )
    for path in attachments:
        email = put_attachment(email, path)
    if tags:
        email = tag(email, list(tags))
    if transactional:
        email = mark_transactional(email)
    return email


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--to",
    "recipients",
    multiple=True,
    help="Recipient address, 'email' or 'Name <email>' (repeatable; defaults to sparkpost.recipients)",
)
@click.option("--cc", multiple=True, help="CC address (repeatable)")
@click.option("--bcc", multiple=True, help="BCC address (repeatable)")
@click.option("--subject", required=True, help="Email subject line")
@click.option("--body", default="", help="Plain-text body")
@click.option("--body-html", default="", help="HTML body")
@click.option("--from", "from_address", default=None, help="Sender address (defaults to sparkpost.from_address)")
@click.option("--reply-to", default=None, help="Reply-To address")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach (repeatable)",
)
@click.option("--tag", "tags", multiple=True, help="SparkPost tag added to every recipient (repeatable)")
@click.option("--transactional", is_flag=True, default=False, help="Mark the transmission as transactional")
@click.option("--api-key", default=None, help="Override sparkpost.api_key")
@click.option("--base-uri", default=None, help="Override sparkpost.base_uri")
@click.option("--timeout", type=float, default=None, help="Override request timeout in seconds")
@click.option(
    "--request-header",
    "request_headers",
    multiple=True,
    metavar="NAME=VALUE",
    callback=parse_request_header,
    help="Extra HTTP header sent to SparkPost (repeatable)",
)
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    recipients: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    body: str,
    body_html: str,
    from_address: str | None,
    reply_to: str | None,
    attachments: tuple[str, ...],
    tags: tuple[str, ...],
    transactional: bool,
    api_key: str | None,
    base_uri: str | None,
    timeout: float | None,
    request_headers: dict[str, str],
) -> None:
    """Send an email through the SparkPost transmissions API."""
    cli_ctx = get_cli_context(ctx)

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra={"command": "send-email", "subject": subject}):
        sparkpost_config = cli_ctx.sparkpost_config()
        overrides = filter_sentinels(
            api_key=api_key,
            base_uri=base_uri,
            timeout=timeout,
            request_headers=request_headers or None,
        )
        try:
            sparkpost_config = apply_validated_overrides(sparkpost_config, overrides)
        except ValidationError as exc:
            handle_validation_error(exc)

        to = list(recipients) if recipients else list(sparkpost_config.recipients)
        if not to:
            click.echo("\nError: No recipients. Pass --to or set sparkpost.recipients.", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT)
        sender = require_sender(from_address or sparkpost_config.from_address)

        logger.info(
            "Sending email",
            extra={
                "recipients": to,
                "cc_count": len(cc),
                "bcc_count": len(bcc),
                "has_html": bool(body_html),
                "attachment_count": len(attachments),
            },
        )

        def _compose_and_deliver() -> TransmissionResponse:
            email = compose_email(
                sender=sender,
                to=to,
                cc=cc,
                bcc=bcc,
                subject=subject,
                body=body,
                body_html=body_html,
                reply_to=reply_to,
                attachments=attachments,
                tags=tags,
                transactional=transactional,
            )
            return cli_ctx.services.deliver_email(email, sparkpost_config)

        execute_with_delivery_error_handling(operation=_compose_and_deliver, recipients=to)


__all__ = ["cli_send_email", "compose_email"]
