import datetime

import pytest

from ..models import Product
from ..services import create_party, seed_chart_of_accounts


@pytest.fixture
def seeded(db):
    seed_chart_of_accounts()
    return {
        "customer": create_party("customer", "Acme Traders"),
        "supplier": create_party("supplier", "Bulk Supplies"),
        "product": Product.objects.create(code="P-001", name="Widget"),
        "day": datetime.date(2024, 1, 10),
    }
