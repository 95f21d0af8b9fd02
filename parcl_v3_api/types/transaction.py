"""Transaction and instruction responses.

Every mutating endpoint comes in two flavours: a ready-to-sign transaction
blob, or the decomposed instructions for the caller to assemble. Instruction
responses are decoded into an internal wire shape first and then converted
into solders `Instruction` / `AccountMeta` values.
"""

from dataclasses import dataclass
from typing import Optional

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ..codec import (
    U32,
    U64,
    decode_base64,
    decode_bool,
    decode_int,
    decode_list,
    decode_object,
    decode_optional_int,
    decode_pubkey,
)
from ..error import DecodeError


@dataclass(frozen=True)
class TransactionInfo:
    """Serialized transaction plus its cost estimate."""

    transaction: bytes
    total_required_lamports: int
    required_compute_lamports: int
    required_rent_lamports: int
    cu_limit: int

    @classmethod
    def from_dict(cls, data: dict) -> "TransactionInfo":
        data = decode_object(data, "TransactionInfo")
        try:
            return cls(
                transaction=decode_base64(data["transaction"]),
                total_required_lamports=decode_int(data["total_required_lamports"], U64),
                required_compute_lamports=decode_int(data["required_compute_lamports"], U64),
                required_rent_lamports=decode_int(data["required_rent_lamports"], U64),
                cu_limit=decode_int(data["cu_limit"], U32),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in TransactionInfo: {e}")


# =============================================================================
# Wire shapes
# =============================================================================


@dataclass(frozen=True)
class AccountMetaInternal:
    """Account metadata as sent by the server."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def from_dict(cls, data: dict) -> "AccountMetaInternal":
        data = decode_object(data, "AccountMetaInternal")
        try:
            return cls(
                pubkey=decode_pubkey(data["pubkey"]),
                is_signer=decode_bool(data["is_signer"]),
                is_writable=decode_bool(data["is_writable"]),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in AccountMetaInternal: {e}")

    def to_account_meta(self) -> AccountMeta:
        return AccountMeta(
            pubkey=self.pubkey,
            is_signer=self.is_signer,
            is_writable=self.is_writable,
        )


@dataclass(frozen=True)
class InstructionInternal:
    """Instruction as sent by the server."""

    program_id: Pubkey
    accounts: list[AccountMetaInternal]
    data: bytes

    @classmethod
    def from_dict(cls, data: dict) -> "InstructionInternal":
        data = decode_object(data, "InstructionInternal")
        try:
            return cls(
                program_id=decode_pubkey(data["program_id"]),
                accounts=[AccountMetaInternal.from_dict(a) for a in decode_list(data["accounts"])],
                data=decode_base64(data["data"]),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in InstructionInternal: {e}")

    def to_instruction(self) -> Instruction:
        return Instruction(
            program_id=self.program_id,
            data=self.data,
            accounts=[account.to_account_meta() for account in self.accounts],
        )


@dataclass(frozen=True)
class InstructionsInternal:
    v3_instructions: list[InstructionInternal]
    compute_budget_instructions: list[InstructionInternal]

    @classmethod
    def from_dict(cls, data: dict) -> "InstructionsInternal":
        data = decode_object(data, "InstructionsInternal")
        try:
            return cls(
                v3_instructions=[
                    InstructionInternal.from_dict(ix) for ix in decode_list(data["v3_instructions"])
                ],
                compute_budget_instructions=[
                    InstructionInternal.from_dict(ix)
                    for ix in decode_list(data["compute_budget_instructions"])
                ],
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in InstructionsInternal: {e}")

    def to_instructions(self) -> "Instructions":
        return Instructions(
            v3_instructions=[ix.to_instruction() for ix in self.v3_instructions],
            compute_budget_instructions=[
                ix.to_instruction() for ix in self.compute_budget_instructions
            ],
        )


@dataclass(frozen=True)
class InstructionInfoInternal:
    instructions: InstructionsInternal
    total_required_lamports: int
    required_compute_lamports: int
    required_rent_lamports: int
    cu_limit: int

    @classmethod
    def from_dict(cls, data: dict) -> "InstructionInfoInternal":
        data = decode_object(data, "InstructionInfoInternal")
        try:
            return cls(
                instructions=InstructionsInternal.from_dict(data["instructions"]),
                total_required_lamports=decode_int(data["total_required_lamports"], U64),
                required_compute_lamports=decode_int(data["required_compute_lamports"], U64),
                required_rent_lamports=decode_int(data["required_rent_lamports"], U64),
                cu_limit=decode_int(data["cu_limit"], U32),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in InstructionInfoInternal: {e}")

    def to_instruction_info(self) -> "InstructionInfo":
        return InstructionInfo(
            instructions=self.instructions.to_instructions(),
            total_required_lamports=self.total_required_lamports,
            required_compute_lamports=self.required_compute_lamports,
            required_rent_lamports=self.required_rent_lamports,
            cu_limit=self.cu_limit,
        )


# =============================================================================
# Public shapes
# =============================================================================


@dataclass(frozen=True)
class Instructions:
    """Exchange instructions and the compute budget instructions they need."""

    v3_instructions: list[Instruction]
    compute_budget_instructions: list[Instruction]

    def all(self) -> list[Instruction]:
        """Compute budget instructions first, then the exchange instructions."""
        return [*self.compute_budget_instructions, *self.v3_instructions]


@dataclass(frozen=True)
class InstructionInfo:
    """Instructions plus their cost estimate."""

    instructions: Instructions
    total_required_lamports: int
    required_compute_lamports: int
    required_rent_lamports: int
    cu_limit: int


# =============================================================================
# Create margin account
# =============================================================================


@dataclass(frozen=True)
class CreateMarginAccountTransactionResponse:
    """Transaction creating a margin account, with the account it will create."""

    transaction: bytes
    total_required_lamports: int
    required_compute_lamports: int
    required_rent_lamports: int
    margin_account_address: Pubkey
    margin_account_id: int
    cu_limit: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CreateMarginAccountTransactionResponse":
        data = decode_object(data, "CreateMarginAccountTransactionResponse")
        try:
            return cls(
                transaction=decode_base64(data["transaction"]),
                total_required_lamports=decode_int(data["total_required_lamports"], U64),
                required_compute_lamports=decode_int(data["required_compute_lamports"], U64),
                required_rent_lamports=decode_int(data["required_rent_lamports"], U64),
                margin_account_address=decode_pubkey(data["margin_account_address"]),
                margin_account_id=decode_int(data["margin_account_id"], U32),
                cu_limit=decode_optional_int(data.get("cu_limit"), U32),
            )
        except KeyError as e:
            raise DecodeError(
                f"Missing required field in CreateMarginAccountTransactionResponse: {e}"
            )


@dataclass(frozen=True)
class CreateMarginAccountInstructionsResponse:
    instructions: Instructions
    total_required_lamports: int
    required_compute_lamports: int
    required_rent_lamports: int
    margin_account_address: Pubkey
    margin_account_id: int
    cu_limit: Optional[int] = None


@dataclass(frozen=True)
class CreateMarginAccountInstructionsResponseInternal:
    instructions: InstructionsInternal
    total_required_lamports: int
    required_compute_lamports: int
    required_rent_lamports: int
    margin_account_address: Pubkey
    margin_account_id: int
    cu_limit: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CreateMarginAccountInstructionsResponseInternal":
        data = decode_object(data, "CreateMarginAccountInstructionsResponse")
        try:
            return cls(
                instructions=InstructionsInternal.from_dict(data["instructions"]),
                total_required_lamports=decode_int(data["total_required_lamports"], U64),
                required_compute_lamports=decode_int(data["required_compute_lamports"], U64),
                required_rent_lamports=decode_int(data["required_rent_lamports"], U64),
                margin_account_address=decode_pubkey(data["margin_account_address"]),
                margin_account_id=decode_int(data["margin_account_id"], U32),
                cu_limit=decode_optional_int(data.get("cu_limit"), U32),
            )
        except KeyError as e:
            raise DecodeError(
                f"Missing required field in CreateMarginAccountInstructionsResponse: {e}"
            )

    def to_response(self) -> CreateMarginAccountInstructionsResponse:
        return CreateMarginAccountInstructionsResponse(
            instructions=self.instructions.to_instructions(),
            total_required_lamports=self.total_required_lamports,
            required_compute_lamports=self.required_compute_lamports,
            required_rent_lamports=self.required_rent_lamports,
            margin_account_address=self.margin_account_address,
            margin_account_id=self.margin_account_id,
            cu_limit=self.cu_limit,
        )
