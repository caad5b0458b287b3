"""
Tests for system config validation and admin saves.

A save only affects payments issued afterwards.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.models.system_config import SystemConfig


class TestSystemConfigModel:

    def test_defaults(self):
        config = SystemConfig()

        assert config.referral_amount == Decimal("1000")
        assert config.binary_amount == Decimal("1000")
        assert config.upline_amount == Decimal("500")
        assert config.admin_fee_amount == Decimal("500")
        assert config.timer_duration == timedelta(hours=2)
        assert config.crypto_verification_ready is False

    def test_blank_credentials_are_missing(self):
        config = SystemConfig(
            enable_crypto_verification=True, crypto_api_key=" ", crypto_wallet_address="0x1"
        )

        assert config.crypto_api_key is None
        assert config.crypto_verification_ready is False

    def test_ready_needs_toggle_and_credentials(self):
        assert SystemConfig(
            enable_crypto_verification=True, crypto_api_key="k", crypto_wallet_address="0x1"
        ).crypto_verification_ready is True
        assert SystemConfig(
            enable_crypto_verification=False, crypto_api_key="k", crypto_wallet_address="0x1"
        ).crypto_verification_ready is False


class TestSaveConfig:

    @pytest.mark.asyncio
    async def test_save_valid_changes(self, platform):
        result = await platform.config.save_config(binary_amount="1200", payment_timer_hours="3")

        assert result.success is True
        assert platform.store.config.binary_amount == Decimal("1200")
        assert platform.store.config.timer_duration == timedelta(hours=3)

    @pytest.mark.asyncio
    async def test_invalid_amount_is_rejected(self, platform):
        before = platform.store.config

        result = await platform.config.save_config(upline_amount=-5)

        assert result.success is False
        assert result.error_code == "validation_error"
        assert platform.store.config == before

    @pytest.mark.asyncio
    async def test_unknown_field_is_rejected(self, platform):
        result = await platform.config.save_config(matrix_width=3)

        assert result.error_code == "unknown_field"

    @pytest.mark.asyncio
    async def test_save_does_not_touch_issued_payments(self, platform, participant):
        await platform.config.save_config(binary_amount=1200, payment_timer_hours=5)

        await platform.onboarding.register_participant("p2", "Bob")

        old = platform.store.get_account(participant).get_payment("pay_bin")
        new = platform.store.get_account("p2").get_payment("pay_bin")
        assert old.amount == Decimal("1000")
        assert old.timer_duration == timedelta(hours=2)
        assert new.amount == Decimal("1200")
        assert new.timer_duration == timedelta(hours=5)


class TestPaymentOptions:

    @pytest.mark.asyncio
    async def test_save_options(self, platform):
        result = await platform.config.save_payment_options(
            [{"id": "opt_1", "name": "Main", "upi_id": "main@ybl"}]
        )

        assert result.success is True
        assert platform.store.payment_options[0].upi_id == "main@ybl"

    @pytest.mark.asyncio
    async def test_duplicate_ids_rejected(self, platform):
        before = platform.store.payment_options

        result = await platform.config.save_payment_options(
            [{"id": "x", "name": "A"}, {"id": "x", "name": "B"}]
        )

        assert result.error_code == "duplicate_id"
        assert platform.store.payment_options == before
