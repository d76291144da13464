# Copyright (c) 2025 VoidUI Project
# 
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
# 
#     http://www.apache.org/licenses/LICENSE-2.0
# 
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Exception types raised by voidui."""

from typing import Optional


class VoidUIError(Exception):
    """Base class for all voidui errors."""
    pass


class CorruptStateError(VoidUIError):
    """Raised when a persisted lock or changelog file fails validation.

    The file is never repaired automatically; ``remediation`` tells the user
    what to do about it.
    """

    def __init__(self, path, reason: str, remediation: Optional[str] = None):
        self.path = path
        self.reason = reason
        self.remediation = remediation
        message = f"{path} is corrupted: {reason}"
        if remediation:
            message += f"\n{remediation}"
        super().__init__(message)


class BaseUnavailableError(VoidUIError):
    """Raised when the originally installed version cannot be retrieved."""

    def __init__(self, component: str, version: str):
        self.component = component
        self.version = version
        super().__init__(
            f"Could not fetch base version {version} of {component}"
        )


class RegistryError(VoidUIError):
    """Raised when the registry cannot be reached or returns bad data."""
    pass


class InstallError(VoidUIError):
    """Raised when the component installer fails."""
    pass


class ChangelogError(VoidUIError):
    """Raised when a changelog snapshot cannot be created."""
    pass
