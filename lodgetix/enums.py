from enum import Enum


class FeeMode(str, Enum):
    PASS_TO_CUSTOMER = "pass_to_customer"
    ABSORB = "absorb"
