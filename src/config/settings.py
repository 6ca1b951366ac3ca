"""Runtime settings read from the environment (python-decouple).

Only ambient concerns are configurable; business limits such as
``MAX_UNITS_PER_ITEM`` are domain constants, not settings.
"""

from decouple import Csv, config

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

# JSON output for production, key/value console output for local runs.
LOG_JSON = config("LOG_JSON", default=True, cast=bool)

# Event-dict keys whose values are always masked in log output.
LOG_MASKED_KEYS = config("LOG_MASKED_KEYS", default="voucher_code", cast=Csv())
