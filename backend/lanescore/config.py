import os

FIFTH_WEEK_POLICIES = ("skip", "clamp", "rollover")


def _canon_policy(val):
    """
    Normalize the fifth-week policy name:
      - defaults to 'skip' when unset/empty
      - case and surrounding whitespace are ignored
      - unknown names fall back to 'skip'
    """
    val = (val or "skip").strip().lower()
    if val not in FIFTH_WEEK_POLICIES:
        return "skip"
    return val

FIFTH_WEEK_POLICY = _canon_policy(os.getenv("LANESCORE_FIFTH_WEEK_POLICY"))
