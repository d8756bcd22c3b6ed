"""
Text blocks reported for each import step.

Labels and their order are relied upon by tooling that scrapes the output.
"""

from datetime import datetime

from gpg_import.lifecycle import format_expiration, format_timestamp
from gpg_import.models.keys import KeySegment, PrivateKeyRecord, ToolInfo
from gpg_import.models.signing import PUSH_SIGN_VALUE, SigningConfigDraft

DRY_RUN_NOTICE = "No changes will be made while running in dry-run mode\n"


def format_tool_info(info: ToolInfo) -> str:
    return f"version: {info.version} (libgcrypt: {info.libgcrypt})\nhomedir: {info.home_dir}\n"


def format_private_key(key: PrivateKeyRecord, now: datetime) -> str:
    lines = [
        f"user:           {key.user_id}",
        f"fingerprint:    {key.primary.fingerprint}",
        f"keygrip:        {key.primary.keygrip}",
        f"key_id:         {key.primary.key_id}",
        f"created_on:     {format_timestamp(key.primary.creation_date)}",
    ]
    if key.primary.expiration_date is not None:
        lines.append(f"expires_on:     {format_expiration(key.primary.expiration_date, now)}")

    if key.subkey is not None:
        lines.extend(
            [
                f"sub_keygrip:    {key.subkey.keygrip}",
                f"sub_key_id:     {key.subkey.key_id}",
                f"sub_created_on: {format_timestamp(key.subkey.creation_date)}",
            ]
        )
        if key.subkey.expiration_date is not None:
            lines.append(
                f"sub_expires_on: {format_expiration(key.subkey.expiration_date, now)}"
            )

    return "\n".join(lines) + "\n"


def format_keygrip(segment: KeySegment) -> str:
    return f"keygrip: {segment.keygrip} [{segment.key_id}]"


def format_trust_level(trust_level: int, key_id: str) -> str:
    return f"trust_level: {trust_level} [{key_id}]"


def format_signing_config(cfg: SigningConfigDraft) -> str:
    lines = [
        f"user.name:       {cfg.user_name}",
        f"user.email:      {cfg.user_email}",
        f"user.signingKey: {cfg.key_id}",
        f"commit.gpgsign:  {str(cfg.commit_sign).lower()}",
        f"tag.gpgsign:     {str(cfg.tag_sign).lower()}",
    ]
    if cfg.push_sign:
        lines.append(f"push.gpgsign:    {PUSH_SIGN_VALUE}")
    return "\n".join(lines) + "\n"
