from decimal import Decimal


class ThresholdGate:
    def __init__(self, min_usd: Decimal):
        self.min_usd = Decimal(min_usd)

    def passes(self, usd_value: Decimal) -> bool:
        return usd_value >= self.min_usd
