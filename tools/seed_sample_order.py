from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
import sys
import time

# Ensure project root is on sys.path when running this script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from orderprint.core.lookups import VAT_APPLICABLE_STATUS
from orderprint.data.db import create_db_and_tables
from orderprint.data.repo import create_sale_order


def main() -> None:
    create_db_and_tables()
    today = datetime.now()
    number = f"SO-{int(time.time())}"
    order = create_sale_order({
        'number': number,
        'customer_name': "Công Ty TNHH ABC",
        'trade_name': "WECARE",
        'vat_status': VAT_APPLICABLE_STATUS,
        'address': "123 Đường Lê Lợi, Phường Bến Nghé, Quận 1, TP.HCM",
        'phone': "0987654321",
        'notes': "Giao hàng trong giờ hành chính",
        'payment_term': 283640000,
        'region': "Sài Gòn",
        'items': [
            {'product_name': "Keo Silicone Chịu Nhiệt", 'quantity': 10, 'unit_price': 150000,
             'discount1': 0.05, 'vat_code': 191920003, 'unit': "Tuýp",
             'delivery_date': today + timedelta(days=7)},
            {'product_name': "Băng Keo Cách Điện", 'quantity': 20, 'unit_price': 75000,
             'discount1': 0.1, 'discount2': 0.02, 'vat_code': 191920002, 'unit': "Cuộn",
             'delivery_date': today + timedelta(days=5)},
            {'product_name': "Keo Dán Đa Năng", 'quantity': 5, 'unit_price': 250000,
             'discount_amount': 20000, 'vat_code': 191920000, 'unit': "Chai",
             'delivery_date': today + timedelta(days=3)},
        ],
    })
    print("Sale order:", order.id, order.number)
    print(f"Run: python -m orderprint.main {order.number}")


if __name__ == "__main__":
    main()
