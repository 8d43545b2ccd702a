from dataclasses import dataclass

DEFAULT_VIEW = "cycles"


@dataclass
class SessionContext:
    """Who is signed in and which view they are looking at.

    Passed explicitly to the sync engine and query layer. `user_id` is None
    while no one is signed in.
    """

    user_id: str | None = None
    active_view: str = DEFAULT_VIEW
