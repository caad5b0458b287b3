"""
System config service.

Admin save of the process-wide tunables and of the admin payment options.
A save only affects slots issued afterwards; slots in flight keep the amount
and countdown they were issued with.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from app.models.system_config import AdminPaymentOption, SystemConfig
from app.services.base_service import BaseService, ServiceResult, log_operation


class SystemConfigService(BaseService):
    """Read and save SystemConfig."""

    def get_config(self) -> SystemConfig:
        return self.store.config

    @log_operation
    async def save_config(self, **changes: Any) -> ServiceResult:
        """
        Validate and store config changes.

        Args:
            **changes: SystemConfig fields to update

        Returns:
            ServiceResult with the new SystemConfig
        """
        unknown = set(changes) - set(SystemConfig.model_fields)
        if unknown:
            return ServiceResult.fail(
                f"Unknown settings: {', '.join(sorted(unknown))}", "unknown_field"
            )

        try:
            config = SystemConfig.model_validate(
                {**self.store.config.model_dump(), **changes}
            )
        except ValidationError as e:
            self.logger.warning(f"Rejected config save: {e.error_count()} error(s)")
            return ServiceResult.fail(str(e), "validation_error")

        self.store.config = config
        self.logger.info(f"System config saved: {', '.join(sorted(changes))}")
        return ServiceResult.ok(config)

    async def save_payment_options(
        self, options: Sequence[AdminPaymentOption | dict[str, Any]]
    ) -> ServiceResult:
        """Replace admin payment options used for binary and admin slots."""
        try:
            validated = tuple(AdminPaymentOption.model_validate(o) for o in options)
        except ValidationError as e:
            return ServiceResult.fail(str(e), "validation_error")

        ids = [o.id for o in validated]
        if len(ids) != len(set(ids)):
            return ServiceResult.fail("Payment option ids must be unique", "duplicate_id")

        self.store.payment_options = validated
        self.logger.info(f"Admin payment options saved: {len(validated)}")
        return ServiceResult.ok(validated)
