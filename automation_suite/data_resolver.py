from __future__ import annotations

import random
import re
import string
from typing import Any, Optional

from .data_store import TestDataStore

PASSWORD_TOKEN = "pass_rand"
ALPHA_TOKEN = "_rand"
NUMERIC_TOKEN = "RAND_"

DEFAULT_NUMERIC_LENGTH = 8
PASSWORD_LENGTH = 12
PASSWORD_SPECIALS = "@#$"
ALPHA_SUFFIX_LENGTH = 4


class DataResolver:
    """
    Turns symbolic data tokens from step text into literal values.

    Resolution order for `resolve`:
      1. "pass_rand"        -> fresh random password
      2. contains "_rand"   -> each occurrence replaced by a fresh 4-letter string
      3. contains "RAND_"   -> fresh random number, stored under the token
      4. anything else      -> stored field, then data repository, then the token itself

    Unknown tokens pass through unchanged, so a mistyped key is used as a
    literal rather than reported.
    """

    def __init__(self, store: TestDataStore, *, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self._rng = rng or random.SystemRandom()

    def resolve(self, token: str) -> Any:
        if token == PASSWORD_TOKEN:
            return self.generate_random_password()
        if ALPHA_TOKEN in token:
            return re.sub(re.escape(ALPHA_TOKEN), lambda _m: self.generate_random_alphabet_string(), token)
        if NUMERIC_TOKEN in token:
            return self.generate_random_numbers(token, token)
        return self.identify_data(token)

    def identify_data(self, token: str) -> Any:
        stored = self.store.get_field(token)
        if stored is not None:
            return stored
        data = self.store.get_data(token)
        if data is not None:
            return data
        return token

    def identify_locator(self, name: Any) -> Any:
        if not isinstance(name, str):
            return name
        locator = self.store.get_locator(name)
        return name if locator is None else locator

    def generate_random_numbers(self, out_var: str, token: str) -> str:
        """
        Generate digits for a RAND_ token and store them under `out_var`.

        "RAND_6" -> six digits; "order_RAND_6" -> "order" + six digits. A
        non-numeric length segment ("RAND_order") falls back to eight digits.
        Tokens without RAND are resolved as data instead.
        """
        if "RAND" not in token:
            value = str(self.identify_data(token))
        else:
            parts = token.split("_")
            length_raw = parts[-1]
            length = int(length_raw) if length_raw.isdigit() and int(length_raw) > 0 else DEFAULT_NUMERIC_LENGTH
            digits = str(self._rng.randint(10 ** (length - 1), 10**length - 1))
            value = digits if len(parts) <= 2 else parts[0] + digits
        self.store.set_field(out_var, value)
        return value

    def generate_random_alphabet_string(self, length: int = ALPHA_SUFFIX_LENGTH) -> str:
        return "".join(self._rng.choice(string.ascii_uppercase) for _ in range(length))

    def generate_random_password(self, length: int = PASSWORD_LENGTH) -> str:
        pools = [string.ascii_lowercase, string.ascii_uppercase, string.digits, PASSWORD_SPECIALS]
        chars = [self._rng.choice(pool) for pool in pools]
        everything = "".join(pools)
        chars.extend(self._rng.choice(everything) for _ in range(length - len(chars)))
        self._rng.shuffle(chars)
        return "".join(chars)
