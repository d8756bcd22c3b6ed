"""
Git signing configuration model.
"""

from collections.abc import Iterator
from dataclasses import dataclass

PUSH_SIGN_VALUE = "if-asked"


@dataclass(frozen=True, kw_only=True)
class SigningConfigDraft:
    """
    Git GPG signing configuration to be written to a git config store.

    Attributes:
        user_name: Maps to user.name.
        user_email: Maps to user.email.
        key_id: Key id or fingerprint of the signing key, maps to user.signingKey.
        commit_sign: Enables signing of commits, maps to commit.gpgsign.
        tag_sign: Enables signing of tags, maps to tag.gpgsign.
        push_sign: Enables signing of pushes when the server asks, maps to push.gpgsign.
    """

    user_name: str
    user_email: str
    key_id: str
    commit_sign: bool = True
    tag_sign: bool = True
    push_sign: bool = True

    def entries(self) -> Iterator[tuple[str, str | bool]]:
        """Yield config names and values in the order they are written."""
        yield "user.name", self.user_name
        yield "user.email", self.user_email
        yield "user.signingKey", self.key_id
        yield "commit.gpgsign", self.commit_sign
        yield "tag.gpgsign", self.tag_sign
        if self.push_sign:
            yield "push.gpgsign", PUSH_SIGN_VALUE
