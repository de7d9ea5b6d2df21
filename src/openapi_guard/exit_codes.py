from __future__ import annotations

OK = 0
ERR_DRIFT = 1
ERR_API_COUNT = 1
ERR_CONTEXT = 3
ERR_DOCUMENT = 4
ERR_INTERNAL = 99


def signal_exit_code(returncode: int) -> int:
    # subprocess reports death-by-signal as -N; shells report 128 + N.
    return 128 - returncode if returncode < 0 else returncode
