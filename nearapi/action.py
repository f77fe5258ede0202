"""Transaction actions and access key permissions."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, ClassVar, Optional

from .borsh import BorshWriter
from .key import Base58PublicKey, PublicKey
from .types import ZERO_NEAR, AccountID, Balance, Gas, Nonce


class ActionKind(IntEnum):
    CREATE_ACCOUNT = 0
    DEPLOY_CONTRACT = 1
    FUNCTION_CALL = 2
    TRANSFER = 3
    STAKE = 4
    ADD_KEY = 5
    DELETE_KEY = 6
    DELETE_ACCOUNT = 7


def _public_key_from_json(value: object) -> PublicKey:
    if isinstance(value, str) and ":" in value:
        return Base58PublicKey.parse(value).to_public_key()
    return PublicKey.from_json(value)


def _balance_from_json(value: object) -> Balance:
    return ZERO_NEAR if value is None else Balance.from_json(value)


@dataclass(frozen=True)
class AccessKeyFunctionCallPermission:
    """Limits a key to calling some methods of one contract."""

    allowance: Optional[Balance] = None
    receiver_id: AccountID = ""
    method_names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "method_names", tuple(self.method_names))
        if self.allowance is not None:
            object.__setattr__(self, "allowance", Balance(self.allowance))


@dataclass(frozen=True)
class AccessKeyPermission:
    """Either full access (no function call limits) or a function call permission."""

    function_call_permission: Optional[AccessKeyFunctionCallPermission] = None

    @property
    def is_full_access(self) -> bool:
        return self.function_call_permission is None

    @classmethod
    def function_call(
        cls, allowance: int, receiver_id: AccountID, method_names: list[str]
    ) -> "AccessKeyPermission":
        return cls(AccessKeyFunctionCallPermission(Balance(allowance), receiver_id, tuple(method_names)))

    @classmethod
    def function_call_unlimited(
        cls, receiver_id: AccountID, method_names: list[str]
    ) -> "AccessKeyPermission":
        return cls(AccessKeyFunctionCallPermission(None, receiver_id, tuple(method_names)))

    @classmethod
    def full_access(cls) -> "AccessKeyPermission":
        return cls(None)

    def write_borsh(self, writer: BorshWriter) -> BorshWriter:
        permission = self.function_call_permission
        if permission is None:
            return writer.u8(1)
        writer.u8(0)
        if permission.allowance is None:
            writer.u8(0)
        else:
            writer.u8(1).u128(permission.allowance)
        writer.string(permission.receiver_id).u32(len(permission.method_names))
        for name in permission.method_names:
            writer.string(name)
        return writer

    @classmethod
    def _from_json(cls, value: object) -> "AccessKeyPermission":
        if isinstance(value, str):
            if value == "FullAccess":
                return cls.full_access()
            raise ValueError(f"'{value}' is neither object or 'FullAccess'")
        if not isinstance(value, dict):
            raise TypeError("access key permission must be a string or an object")
        fields = value.get("FunctionCall") or {}
        allowance = fields.get("allowance")
        return cls(
            AccessKeyFunctionCallPermission(
                None if allowance is None else Balance.from_json(allowance),
                fields.get("receiver_id", ""),
                tuple(fields.get("method_names") or ()),
            )
        )


@dataclass(frozen=True)
class Action:
    """Base of all actions; a transaction carries a list of them."""

    kind: ClassVar[ActionKind]
    json_name: ClassVar[str]

    def prepaid_gas(self) -> Gas:
        return 0

    def deposit_balance(self) -> Balance:
        return ZERO_NEAR

    @classmethod
    def from_json(cls, value: object) -> "Action":
        """Parse the externally tagged JSON form, e.g. {"Transfer": {...}}."""
        if isinstance(value, str):
            name, fields = value, {}
        elif isinstance(value, dict):
            if len(value) != 1:
                raise ValueError(
                    f"action object contains invalid amount of keys (expected: 1, got: {len(value)})"
                )
            ((name, fields),) = value.items()
        else:
            raise TypeError(f"action must be a JSON object, got {type(value).__name__}")
        try:
            action_cls = _BY_JSON_NAME[name]
        except KeyError:
            raise ValueError(f"unknown action '{name}'") from None
        if fields is None:
            fields = {}
        if not isinstance(fields, dict):
            raise TypeError(f"fields of action '{name}' must be a JSON object")
        return action_cls._from_fields(fields)

    def write_borsh(self, writer: BorshWriter) -> BorshWriter:
        writer.u8(self.kind)
        self._write_fields(writer)
        return writer

    def _write_fields(self, writer: BorshWriter) -> None:
        pass

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "Action":
        return cls()


@dataclass(frozen=True)
class CreateAccount(Action):
    """Create an account using the transaction receiver as its id."""

    kind: ClassVar[ActionKind] = ActionKind.CREATE_ACCOUNT
    json_name: ClassVar[str] = "CreateAccount"


@dataclass(frozen=True)
class DeployContract(Action):
    kind: ClassVar[ActionKind] = ActionKind.DEPLOY_CONTRACT
    json_name: ClassVar[str] = "DeployContract"

    code: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", bytes(self.code))

    def _write_fields(self, writer: BorshWriter) -> None:
        writer.blob(self.code)

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "DeployContract":
        return cls(base64.b64decode(fields.get("code") or ""))


@dataclass(frozen=True)
class FunctionCall(Action):
    kind: ClassVar[ActionKind] = ActionKind.FUNCTION_CALL
    json_name: ClassVar[str] = "FunctionCall"

    method_name: str = ""
    args: bytes = b""
    gas: Gas = 0
    deposit: Balance = ZERO_NEAR

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", bytes(self.args or b""))
        object.__setattr__(self, "deposit", Balance(self.deposit))

    def __str__(self) -> str:
        args = self.args.decode("utf-8", errors="replace")
        return (
            f"FunctionCall{{MethodName: {self.method_name}, Args: {args}, "
            f"Gas: {self.gas}, Deposit: {self.deposit}}}"
        )

    def prepaid_gas(self) -> Gas:
        return self.gas

    def deposit_balance(self) -> Balance:
        return self.deposit

    def _write_fields(self, writer: BorshWriter) -> None:
        writer.string(self.method_name).blob(self.args).u64(self.gas).u128(self.deposit)

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "FunctionCall":
        return cls(
            method_name=fields.get("method_name", ""),
            args=base64.b64decode(fields.get("args") or ""),
            gas=int(fields.get("gas", 0)),
            deposit=_balance_from_json(fields.get("deposit")),
        )


@dataclass(frozen=True)
class Transfer(Action):
    kind: ClassVar[ActionKind] = ActionKind.TRANSFER
    json_name: ClassVar[str] = "Transfer"

    deposit: Balance = ZERO_NEAR

    def __post_init__(self) -> None:
        object.__setattr__(self, "deposit", Balance(self.deposit))

    def __str__(self) -> str:
        return f"Transfer{{Deposit: {self.deposit}}}"

    def deposit_balance(self) -> Balance:
        return self.deposit

    def _write_fields(self, writer: BorshWriter) -> None:
        writer.u128(self.deposit)

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "Transfer":
        return cls(_balance_from_json(fields.get("deposit")))


@dataclass(frozen=True)
class Stake(Action):
    kind: ClassVar[ActionKind] = ActionKind.STAKE
    json_name: ClassVar[str] = "Stake"

    stake: Balance = ZERO_NEAR
    public_key: PublicKey = field(default_factory=PublicKey)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stake", Balance(self.stake))

    def _write_fields(self, writer: BorshWriter) -> None:
        writer.u128(self.stake).fixed(bytes(self.public_key))

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "Stake":
        return cls(
            _balance_from_json(fields.get("stake")),
            _public_key_from_json(fields.get("public_key")),
        )


@dataclass(frozen=True)
class AddKey(Action):
    kind: ClassVar[ActionKind] = ActionKind.ADD_KEY
    json_name: ClassVar[str] = "AddKey"

    public_key: PublicKey = field(default_factory=PublicKey)
    nonce: Nonce = 0
    permission: AccessKeyPermission = field(default_factory=AccessKeyPermission.full_access)

    def _write_fields(self, writer: BorshWriter) -> None:
        writer.fixed(bytes(self.public_key)).u64(self.nonce)
        self.permission.write_borsh(writer)

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "AddKey":
        access_key = fields.get("access_key") or {}
        return cls(
            _public_key_from_json(fields.get("public_key")),
            int(access_key.get("nonce", 0)),
            AccessKeyPermission._from_json(access_key.get("permission", "FullAccess")),
        )


@dataclass(frozen=True)
class DeleteKey(Action):
    kind: ClassVar[ActionKind] = ActionKind.DELETE_KEY
    json_name: ClassVar[str] = "DeleteKey"

    public_key: PublicKey = field(default_factory=PublicKey)

    def _write_fields(self, writer: BorshWriter) -> None:
        writer.fixed(bytes(self.public_key))

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "DeleteKey":
        return cls(_public_key_from_json(fields.get("public_key")))


@dataclass(frozen=True)
class DeleteAccount(Action):
    kind: ClassVar[ActionKind] = ActionKind.DELETE_ACCOUNT
    json_name: ClassVar[str] = "DeleteAccount"

    beneficiary_id: AccountID = ""

    def _write_fields(self, writer: BorshWriter) -> None:
        writer.string(self.beneficiary_id)

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> "DeleteAccount":
        return cls(fields.get("beneficiary_id", ""))


_BY_JSON_NAME: dict[str, type[Action]] = {
    action_cls.json_name: action_cls
    for action_cls in (
        CreateAccount,
        DeployContract,
        FunctionCall,
        Transfer,
        Stake,
        AddKey,
        DeleteKey,
        DeleteAccount,
    )
}