"""vaultshare: access control for a decentralized file vault.

Grant, revoke, and list file shares over an explicit in-memory state.
"""

__version__ = "0.1.0"

from vaultshare.exceptions import (
    ConsistencyError,
    StorageError,
    UnknownFileError,
    UploadError,
    VaultShareError,
)
from vaultshare.groups import get_group_by_alias
from vaultshare.metadata import get_allowed_users, get_file_status
from vaultshare.persistence import load_state, save_state
from vaultshare.sharing import (
    SharingService,
    can_share,
    get_shared_files,
    revoke_share,
    share_file,
)
from vaultshare.state import (
    ContentState,
    FileGroup,
    FileMetadata,
    FileRecord,
    PartiallyUploaded,
    Pending,
    State,
    Uploaded,
    User,
)
from vaultshare.types import (
    AliasInfo,
    FileSharingResponse,
    FileStatus,
    MultiRequestResponse,
    PartiallyUploadedStatus,
    PendingStatus,
    PublicFileMetadata,
    PublicUser,
    UploadedStatus,
    WhoAmIResponse,
)
from vaultshare.uploads import (
    get_alias_info,
    get_requests,
    multi_request,
    request_file,
    upload_file,
    upload_file_continue,
)
from vaultshare.users import get_user_info, get_users, set_user_info, who_am_i

__all__ = [
    "AliasInfo",
    "ConsistencyError",
    "ContentState",
    "FileGroup",
    "FileMetadata",
    "FileRecord",
    "FileSharingResponse",
    "FileStatus",
    "MultiRequestResponse",
    "PartiallyUploaded",
    "PartiallyUploadedStatus",
    "Pending",
    "PendingStatus",
    "PublicFileMetadata",
    "PublicUser",
    "SharingService",
    "State",
    "StorageError",
    "UnknownFileError",
    "UploadError",
    "Uploaded",
    "UploadedStatus",
    "User",
    "VaultShareError",
    "WhoAmIResponse",
    "__version__",
    "can_share",
    "get_alias_info",
    "get_allowed_users",
    "get_file_status",
    "get_group_by_alias",
    "get_requests",
    "get_shared_files",
    "get_user_info",
    "get_users",
    "load_state",
    "multi_request",
    "request_file",
    "revoke_share",
    "save_state",
    "set_user_info",
    "share_file",
    "upload_file",
    "upload_file_continue",
    "who_am_i",
]
