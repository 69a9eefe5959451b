"""
Local mirrors of server collections.

Each successful call patches ``items`` in place (append, replace or
remove by id) instead of re-reading the whole list.  A failed call
leaves ``items`` untouched, stores the message in ``error`` and returns
``None`` (or ``False`` for deletes).
"""
from __future__ import annotations

from .http import ApiClient, ApiError

RESOURCE_PATHS = {
    'patients': '/api/patients',
    'appointments': '/api/appointments',
    'clinical_records': '/api/clinical-records',
    'vitals': '/api/vitals',
    'medications': '/api/medications',
    'lab_results': '/api/lab-results',
    'allergies': '/api/allergies',
    'conditions': '/api/conditions',
    'documents': '/api/documents',
    'invoices': '/api/invoices',
    'payments': '/api/payments',
    'insurance_providers': '/api/insurance-providers',
    'insurance_claims': '/api/insurance-claims',
    'suppliers': '/api/suppliers',
    'products': '/api/products',
    'batches': '/api/batches',
    'purchase_orders': '/api/purchase-orders',
    'sales_orders': '/api/sales-orders',
    'quality_control': '/api/quality-control',
}


class ResourceStore:
    def __init__(self, client: ApiClient, path: str):
        self.client = client
        self.path = path
        self.items: list[dict] = []
        self.pagination: dict | None = None
        self.error: str | None = None

    @classmethod
    def named(cls, client: ApiClient, name: str) -> 'ResourceStore':
        return cls(client, RESOURCE_PATHS[name])

    def _fail(self, exc: ApiError):
        self.error = exc.message
        return None

    def _index(self, item_id) -> int | None:
        for i, item in enumerate(self.items):
            if item.get('id') == item_id:
                return i
        return None

    def fetch(self, **params) -> list[dict] | None:
        try:
            body = self.client.get(self.path, **params)
        except ApiError as exc:
            return self._fail(exc)
        if isinstance(body, dict) and 'data' in body:
            self.items = list(body['data'])
            self.pagination = body.get('pagination')
        else:
            self.items = list(body or [])
            self.pagination = None
        self.error = None
        return self.items

    def add(self, payload: dict) -> dict | None:
        try:
            created = self.client.post(self.path, payload)
        except ApiError as exc:
            return self._fail(exc)
        self.items.append(created)
        self.error = None
        return created

    def update(self, item_id, changes: dict) -> dict | None:
        try:
            updated = self.client.put(f'{self.path}/{item_id}', changes)
        except ApiError as exc:
            return self._fail(exc)
        idx = self._index(item_id)
        if idx is not None:
            self.items[idx] = updated
        self.error = None
        return updated

    def delete(self, item_id) -> bool:
        try:
            self.client.delete(f'{self.path}/{item_id}')
        except ApiError as exc:
            self._fail(exc)
            return False
        idx = self._index(item_id)
        if idx is not None:
            del self.items[idx]
        self.error = None
        return True


class BillingStore:
    """Invoices and payments kept consistent on the client.

    The server answers a payment write with the refreshed invoice
    summary, which is merged into the matching local invoice.
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.invoices = ResourceStore.named(client, 'invoices')
        self.payments = ResourceStore.named(client, 'payments')

    @property
    def error(self) -> str | None:
        return self.payments.error or self.invoices.error

    def fetch(self, **params) -> bool:
        return self.invoices.fetch(**params) is not None and self.payments.fetch(**params) is not None

    def _apply_summary(self, summary: dict | None) -> None:
        if not summary:
            return
        idx = self.invoices._index(summary.get('id'))
        if idx is not None:
            self.invoices.items[idx] = {**self.invoices.items[idx], **summary}

    def add_invoice(self, payload: dict) -> dict | None:
        return self.invoices.add(payload)

    def add_payment(self, payload: dict) -> dict | None:
        payment = self.payments.add(payload)
        if payment is not None:
            self._apply_summary(payment.get('invoice'))
        return payment

    def update_payment(self, payment_id, changes: dict) -> dict | None:
        payment = self.payments.update(payment_id, changes)
        if payment is not None:
            self._apply_summary(payment.get('invoice'))
        return payment

    def delete_payment(self, payment_id) -> bool:
        idx = self.payments._index(payment_id)
        invoice_id = self.payments.items[idx].get('invoiceId') if idx is not None else None
        if not self.payments.delete(payment_id):
            return False
        if invoice_id is not None:
            try:
                invoice = self.client.get(f'{self.invoices.path}/{invoice_id}')
            except ApiError as exc:
                self.invoices.error = exc.message
            else:
                self._apply_summary(invoice)
        return True
