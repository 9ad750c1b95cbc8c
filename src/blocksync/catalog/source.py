"""CatalogSource — the set of Bedrock models that should exist as blocks.

The live path shells out to the AWS CLI::

    aws bedrock list-foundation-models --region us-east-1 --output json

and keeps the ``modelSummaries[].modelId`` values whose prefix is on the
vendor allow-list.  Any failure (CLI missing, non-zero exit, timeout,
unparseable output, empty listing) degrades to the static table in
:mod:`blocksync.catalog.fallback`.  Falling back is not an error; the
caller proceeds identically with either result.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from blocksync.catalog.fallback import fallback_descriptors
from blocksync.catalog.models import CatalogOrigin, CatalogResult, ModelDescriptor
from blocksync.catalog.naming import (
    context_length_hint,
    display_name,
    matches_vendor,
    short_name,
)
from blocksync.runtime.errors import BlockSyncError, CommandError
from blocksync.runtime.models import CommandRequest
from blocksync.runtime.process import CommandRunner
from blocksync.utils.telemetry import (
    ATTR_CATALOG_SIZE,
    ATTR_CATALOG_SOURCE,
    ATTR_REGION,
    get_tracer,
)

if TYPE_CHECKING:
    from blocksync.config import SyncSettings

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class CatalogUnavailable(BlockSyncError):
    """The live listing could not produce any model ids."""


class CatalogSource:
    """Produce the ordered catalog of model candidates for one run."""

    def __init__(self, settings: SyncSettings, runner: CommandRunner | None = None) -> None:
        self._settings = settings
        self._runner = runner or CommandRunner()

    def fetch(self, *, offline: bool = False) -> CatalogResult:
        """Return live candidates, or the fallback table if the live call fails."""
        with _tracer.start_as_current_span("blocksync.catalog.fetch") as span:
            span.set_attribute(ATTR_REGION, self._settings.region)

            if offline:
                result = self._fallback("offline mode requested")
            else:
                try:
                    model_ids = self.list_model_ids()
                except CatalogUnavailable as exc:
                    result = self._fallback(str(exc))
                else:
                    result = CatalogResult(
                        origin=CatalogOrigin.LIVE,
                        descriptors=self.describe(model_ids),
                    )
                    logger.info(
                        "Found %d relevant models online: %s",
                        len(result.descriptors),
                        " ".join(d.short_name for d in result.descriptors),
                    )

            span.set_attribute(ATTR_CATALOG_SOURCE, result.origin.value)
            span.set_attribute(ATTR_CATALOG_SIZE, len(result.descriptors))
            return result

    def list_model_ids(self) -> list[str]:
        """All model ids the live listing returns, sorted and de-duplicated.

        Raises:
            CatalogUnavailable: On any failure of the listing call.
        """
        command = self._settings.aws_command
        if not self._runner.available(command):
            raise CatalogUnavailable(f"{command} executable not found")

        request = CommandRequest(
            command=[
                command,
                "bedrock",
                "list-foundation-models",
                "--region",
                self._settings.region,
                "--output",
                "json",
            ],
            timeout=self._settings.catalog_timeout,
        )
        try:
            result = self._runner.run(request)
        except CommandError as exc:
            raise CatalogUnavailable(str(exc)) from exc

        if not result.ok:
            raise CatalogUnavailable(
                f"listing failed with exit code {result.exit_code} "
                "(check credentials/region)"
            )

        model_ids = parse_model_ids(result.stdout)
        if not model_ids:
            raise CatalogUnavailable("no models returned from the listing")

        logger.info("Fetched %d models from AWS Bedrock", len(model_ids))
        return model_ids

    def describe(self, model_ids: list[str]) -> list[ModelDescriptor]:
        """Descriptors for the allow-listed ids, in input order."""
        vendors = self._settings.vendors
        descriptors: list[ModelDescriptor] = []
        for model_id in model_ids:
            if not matches_vendor(model_id, self._settings.vendor_prefixes):
                continue
            name = short_name(model_id)
            descriptors.append(
                ModelDescriptor(
                    short_name=name,
                    provider_model_id=model_id,
                    display_name=display_name(name, vendors),
                    supports_tools=True,
                    context_length=context_length_hint(model_id),
                )
            )
        return descriptors

    @staticmethod
    def _fallback(reason: str) -> CatalogResult:
        logger.warning("%s, falling back to hardcoded model list", reason)
        return CatalogResult(
            origin=CatalogOrigin.FALLBACK,
            descriptors=fallback_descriptors(),
            reason=reason,
        )


def parse_model_ids(payload: str) -> list[str]:
    """Extract ``modelSummaries[].modelId`` from a listing response.

    Raises:
        CatalogUnavailable: If the payload is not the expected JSON shape.
    """
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise CatalogUnavailable(f"unparseable listing output: {exc}") from exc

    if not isinstance(data, dict):
        raise CatalogUnavailable("listing output is not a JSON object")

    summaries = data.get("modelSummaries") or []
    if not isinstance(summaries, list):
        raise CatalogUnavailable("modelSummaries is not a list")

    ids = {
        str(s["modelId"]).strip()
        for s in summaries
        if isinstance(s, dict) and s.get("modelId")
    }
    ids.discard("")
    return sorted(ids)
