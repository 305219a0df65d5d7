from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

RowId = Union[int, str]


class CallerProfile(BaseModel):
    id: RowId
    role: Optional[str] = None
    branch_id: Optional[RowId] = None


class UserRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RowId
    username: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None
    receives_transportation: Optional[Union[bool, int]] = None
    created_at: Optional[str] = None
    branch_id: Optional[RowId] = None
    branch_name: Optional[str] = None


class UsersResponse(BaseModel):
    users: List[UserRecord]
