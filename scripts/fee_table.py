from __future__ import annotations

import argparse
import logging

from lodgetix.config import load_settings
from lodgetix.display import get_processing_fee_label
from lodgetix.fees import calculate_fees_with_geolocation
from lodgetix.validation import validate_fee_calculation

logging.basicConfig(level=logging.INFO)


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the fee split for a list of subtotals.")
    parser.add_argument("subtotals", nargs="+", help="Subtotals in dollars, e.g. 500 2300.")
    parser.add_argument("--country", default=None, help="Billing country code, e.g. AU.")
    args = parser.parse_args()

    settings = load_settings()
    print(
        f"{'subtotal':>12} {'platform':>10} {'stripe':>10} {'fees':>10} {'total':>12}  type"
    )
    for subtotal in args.subtotals:
        try:
            calculation = calculate_fees_with_geolocation(subtotal, args.country, settings=settings)
        except ValueError as exc:
            logging.error("skipping %s: %s", subtotal, exc)
            continue
        result = validate_fee_calculation(calculation, settings)
        for error in result.errors:
            logging.warning("%s: %s", subtotal, error)
        print(
            f"{calculation.connected_amount:>12.2f} {calculation.platform_fee:>10.2f} "
            f"{calculation.stripe_fee:>10.2f} {calculation.processing_fees_display:>10.2f} "
            f"{calculation.customer_payment:>12.2f}  {get_processing_fee_label(calculation.is_domestic)}"
        )


if __name__ == "__main__":
    main()
