from typing import Literal
from pydantic import BaseModel


class BinderConfig(BaseModel):
    """
    Runtime options of a SettingsBinder.

    error_policy: what happens after a dispatch pass in which handlers failed
        and no on_error callback was given. "raise" raises DispatchError to
        whoever triggered the change, "log" only logs the failures.
    trace_dispatch: log every dispatch at DEBUG level.
    """
    error_policy: Literal["raise", "log"] = "raise"
    trace_dispatch: bool = False
