"""Domain tests for WebhookReconciler — per-order serialisation and error paths.

The outcome command is mocked; these tests cover how deliveries are routed
and serialised, not how the order applies them.
"""

import threading
import time
from unittest.mock import MagicMock, patch

import pytest
from ordering.checkout.locks import order_locks
from ordering.checkout.webhook import WebhookReconciler
from ordering.errors import OrderNotFoundError
from ordering.order.order import PaymentStatus
from payments.gateway.port import PaymentOutcome, PaymentResult, WebhookSignatureError


def _gateway(result):
    gateway = MagicMock()
    gateway.parse_webhook_event.return_value = result
    return gateway


@patch("ordering.checkout.webhook.current_domain", new_callable=MagicMock)
class TestRouting:
    def test_paid_outcome_dispatches_paid_status(self, mock_domain):
        result = PaymentResult(order_id="ord-001", outcome=PaymentOutcome.PAID)

        assert WebhookReconciler(gateway=_gateway(result)).handle(b"{}", {}) == result

        command = mock_domain.process.call_args.args[0]
        assert command.order_id == "ord-001"
        assert command.status == PaymentStatus.PAID.value

    def test_failed_outcome_dispatches_failed_status(self, mock_domain):
        result = PaymentResult(order_id="ord-001", outcome=PaymentOutcome.FAILED)
        WebhookReconciler(gateway=_gateway(result)).handle(b"{}", {})
        assert mock_domain.process.call_args.args[0].status == PaymentStatus.FAILED.value

    def test_irrelevant_event_dispatches_nothing(self, mock_domain):
        assert WebhookReconciler(gateway=_gateway(None)).handle(b"{}", {}) is None
        mock_domain.process.assert_not_called()

    def test_signature_failure_propagates(self, mock_domain):
        gateway = MagicMock()
        gateway.parse_webhook_event.side_effect = WebhookSignatureError("bad signature")

        with pytest.raises(WebhookSignatureError):
            WebhookReconciler(gateway=gateway).handle(b"{}", {})
        mock_domain.process.assert_not_called()

    def test_unknown_order_reraised(self, mock_domain):
        mock_domain.process.side_effect = OrderNotFoundError({"order_id": ["Order ord-404 not found"]})
        result = PaymentResult(order_id="ord-404", outcome=PaymentOutcome.PAID)

        with pytest.raises(OrderNotFoundError):
            WebhookReconciler(gateway=_gateway(result)).handle(b"{}", {})
        assert len(order_locks) == 0

    def test_outcome_applied_while_order_lock_is_held(self, mock_domain):
        held = []
        mock_domain.process.side_effect = lambda *args, **kwargs: held.append(len(order_locks))
        result = PaymentResult(order_id="ord-001", outcome=PaymentOutcome.PAID)

        WebhookReconciler(gateway=_gateway(result)).handle(b"{}", {})

        assert held == [1]
        assert len(order_locks) == 0


@patch("ordering.checkout.webhook.RecordPaymentOutcome")
@patch("ordering.checkout.webhook.current_domain", new_callable=MagicMock)
class TestConcurrentDeliveries:
    def test_same_order_deliveries_never_overlap(self, mock_domain, mock_command):
        active = 0
        peak = 0
        counter = threading.Lock()

        def slow_process(*args, **kwargs):
            nonlocal active, peak
            with counter:
                active += 1
                peak = max(peak, active)
            time.sleep(0.01)
            with counter:
                active -= 1

        mock_domain.process.side_effect = slow_process
        reconciler = WebhookReconciler(
            gateway=_gateway(PaymentResult(order_id="ord-001", outcome=PaymentOutcome.PAID))
        )

        threads = [threading.Thread(target=reconciler.handle, args=(b"{}", {})) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert mock_domain.process.call_count == 6
        assert peak == 1
