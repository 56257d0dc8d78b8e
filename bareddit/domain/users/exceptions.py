# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from bareddit.shared.errors.base import InfrastructureError


class KeyValueStoreError(InfrastructureError):
    def __init__(self, operation: str) -> None:
        super().__init__(code="kv_store_unavailable", context={"operation": operation})


class MailDeliveryError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__(code="mail_delivery_failed")
