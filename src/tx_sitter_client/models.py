#!/usr/bin/env python3
"""Data models for the tx-sitter transaction envelopes.

This module provides immutable data classes for the request and response
shapes exchanged with the send and transactions functions. Field names are
snake_case in Python and camelCase on the wire; ``to_dict``/``from_dict``
translate between the two.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from .errors import SerializationError


class TransactionStatus(Enum):
    """Lifecycle stage of a transaction as reported by the service."""
    QUEUED = "queued"  # waiting to be broadcast
    PENDING = "pending"  # broadcast, awaiting confirmation
    MINED = "mined"  # included in a block
    FINALIZED = "finalized"  # included in a block older than the network's finality threshold
    DROPPED = "dropped"  # failed to broadcast, will not be retried


class TransactionPriority(Enum):
    """Fee priority, slowest first."""
    SLOWEST = "slowest"
    SLOW = "slow"
    REGULAR = "regular"
    FAST = "fast"
    FASTEST = "fastest"


class TransactionType(Enum):
    """Domain kind of a relayed transaction."""
    ALL = "all"
    SWAP = "swap"
    TRANSFER = "transfer"
    DROP = "drop"
    GRANT = "grant"
    FUNDING = "funding"
    WALLET_DEPLOYMENT = "walletDeployment"
    ROOT_PROPAGATION = "rootPropagation"
    NOOP = "noop"
    BUNDLE = "bundle"


def _expect_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise SerializationError(
            f"Invalid {what}: expected a JSON object, got {type(data).__name__}"
        )
    return data


def _required_str(data: dict[str, Any], key: str, what: str) -> str:
    if key not in data:
        raise SerializationError(f"Invalid {what}: missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise SerializationError(
            f"Invalid {what}: field '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _optional_str(data: dict[str, Any], key: str, what: str) -> str | None:
    if data.get(key) is None:
        return None
    return _required_str(data, key, what)


def _parse_enum(enum_cls: type[Enum], value: Any, key: str, what: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError as e:
        raise SerializationError(
            f"Invalid {what}: unknown {enum_cls.__name__} '{value}' in field '{key}'", e
        ) from e


def _optional_enum(enum_cls: type[Enum], data: dict[str, Any], key: str, what: str) -> Any:
    if data.get(key) is None:
        return None
    return _parse_enum(enum_cls, data[key], key, what)


@dataclass(frozen=True, slots=True)
class TransactionInput:
    """A transaction submitted to a relayer.

    Numeric amounts are decimal strings so no precision is lost on the way to
    the service.

    Attributes:
        to: Destination address
        value: Wei value as a decimal string
        gas_limit: Gas limit as a decimal string
        relayer_id: Relayer that signs and sends the transaction
        data: Hex calldata, omitted on the wire when empty
        transaction_id: Caller supplied idempotency key
        priority: Fee priority
        transaction_type: Domain kind of the transaction
    """

    to: str
    value: str
    gas_limit: str
    relayer_id: str
    data: str = ""
    transaction_id: str | None = None
    priority: TransactionPriority | None = None
    transaction_type: TransactionType | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation."""
        result: dict[str, Any] = {"to": self.to}
        if self.data:
            result["data"] = self.data
        result["value"] = self.value
        result["gasLimit"] = self.gas_limit
        result["relayerId"] = self.relayer_id
        if self.transaction_id is not None:
            result["transactionId"] = self.transaction_id
        if self.priority is not None:
            result["priority"] = self.priority.value
        if self.transaction_type is not None:
            result["transactionType"] = self.transaction_type.value
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "TransactionInput":
        """Build from the wire representation.

        Raises:
            SerializationError: If a required field is missing or has the wrong type
        """
        what = "transaction input"
        data = _expect_object(data, what)
        return cls(
            to=_required_str(data, "to", what),
            value=_required_str(data, "value", what),
            gas_limit=_required_str(data, "gasLimit", what),
            relayer_id=_required_str(data, "relayerId", what),
            data=_optional_str(data, "data", what) or "",
            transaction_id=_optional_str(data, "transactionId", what),
            priority=_optional_enum(TransactionPriority, data, "priority", what),
            transaction_type=_optional_enum(TransactionType, data, "transactionType", what),
        )


@dataclass(frozen=True, slots=True)
class Transaction:
    """A transaction record as stored by the service.

    Carries every TransactionInput field plus the server assigned ``id`` and
    the on-chain ``tx_hash``.
    """

    id: str
    to: str
    value: str
    gas_limit: str
    relayer_id: str
    tx_hash: str
    data: str = ""
    transaction_id: str | None = None
    priority: TransactionPriority | None = None
    transaction_type: TransactionType | None = None

    def __str__(self) -> str:
        return (
            f"Transaction(id={self.id}, "
            f"relayer={self.relayer_id}, "
            f"tx_hash={self.tx_hash[:10]}...)"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation."""
        result: dict[str, Any] = {"id": self.id, "to": self.to}
        if self.data:
            result["data"] = self.data
        result["value"] = self.value
        result["gasLimit"] = self.gas_limit
        result["relayerId"] = self.relayer_id
        if self.transaction_id is not None:
            result["transactionId"] = self.transaction_id
        if self.priority is not None:
            result["priority"] = self.priority.value
        if self.transaction_type is not None:
            result["transactionType"] = self.transaction_type.value
        result["txHash"] = self.tx_hash
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "Transaction":
        """Build from the wire representation.

        Raises:
            SerializationError: If a required field is missing or has the wrong type
        """
        what = "transaction"
        data = _expect_object(data, what)
        return cls(
            id=_required_str(data, "id", what),
            to=_required_str(data, "to", what),
            value=_required_str(data, "value", what),
            gas_limit=_required_str(data, "gasLimit", what),
            relayer_id=_required_str(data, "relayerId", what),
            tx_hash=_required_str(data, "txHash", what),
            data=_optional_str(data, "data", what) or "",
            transaction_id=_optional_str(data, "transactionId", what),
            priority=_optional_enum(TransactionPriority, data, "priority", what),
            transaction_type=_optional_enum(TransactionType, data, "transactionType", what),
        )


@dataclass(frozen=True, slots=True)
class TransactionResponse:
    """Response of the send function; ``result`` is the transaction id."""

    id: int
    jsonrpc: str
    result: str

    @classmethod
    def from_dict(cls, data: Any) -> "TransactionResponse":
        what = "transaction response"
        data = _expect_object(data, what)
        response_id = data.get("id")
        if not isinstance(response_id, int) or isinstance(response_id, bool):
            raise SerializationError(f"Invalid {what}: field 'id' must be an integer")
        return cls(
            id=response_id,
            jsonrpc=_required_str(data, "jsonrpc", what),
            result=_required_str(data, "result", what),
        )


@dataclass(frozen=True, slots=True)
class ReqTransactionById:
    """Query for a single transaction by its id."""

    BY: ClassVar[str] = "TransactionId"

    transaction_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"by": self.BY, "transactionId": self.transaction_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReqTransactionById":
        return cls(transaction_id=_required_str(data, "transactionId", "transaction request"))


@dataclass(frozen=True, slots=True)
class ReqByRelayerIdAndStatus:
    """Query for every transaction of a relayer in a given status."""

    BY: ClassVar[str] = "RelayerId"

    relayer_id: str
    status: TransactionStatus = TransactionStatus.QUEUED

    def to_dict(self) -> dict[str, Any]:
        return {"by": self.BY, "relayerId": self.relayer_id, "status": self.status.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReqByRelayerIdAndStatus":
        what = "transaction request"
        if "status" not in data:
            raise SerializationError(f"Invalid {what}: missing field 'status'")
        return cls(
            relayer_id=_required_str(data, "relayerId", what),
            status=_parse_enum(TransactionStatus, data["status"], "status", what),
        )


TransactionRequest = ReqTransactionById | ReqByRelayerIdAndStatus

_REQUEST_VARIANTS: dict[str, type[ReqTransactionById] | type[ReqByRelayerIdAndStatus]] = {
    ReqTransactionById.BY: ReqTransactionById,
    ReqByRelayerIdAndStatus.BY: ReqByRelayerIdAndStatus,
}


def transaction_request_from_dict(data: Any) -> TransactionRequest:
    """Decode a transactions-function query, dispatching on its ``by`` tag.

    Raises:
        SerializationError: If the tag is missing or unknown, or the variant is invalid
    """
    data = _expect_object(data, "transaction request")
    tag = data.get("by")
    variant = _REQUEST_VARIANTS.get(tag) if isinstance(tag, str) else None
    if variant is None:
        raise SerializationError(f"Invalid transaction request: unknown 'by' tag {tag!r}")
    return variant.from_dict(data)


@dataclass(frozen=True, slots=True)
class RelayerDetails:
    """Gas policy of a relayer; prices are decimal strings."""

    transaction_type: TransactionType
    max_l1_gas_price: str
    max_l2_gas_price: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactionType": self.transaction_type.value,
            "maxL1GasPrice": self.max_l1_gas_price,
            "maxL2GasPrice": self.max_l2_gas_price,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "RelayerDetails":
        what = "relayer details"
        data = _expect_object(data, what)
        if "transactionType" not in data:
            raise SerializationError(f"Invalid {what}: missing field 'transactionType'")
        return cls(
            transaction_type=_parse_enum(
                TransactionType, data["transactionType"], "transactionType", what
            ),
            max_l1_gas_price=_required_str(data, "maxL1GasPrice", what),
            max_l2_gas_price=_required_str(data, "maxL2GasPrice", what),
        )


@dataclass(frozen=True, slots=True)
class CreateRelayerRequest:
    """Request to register a new relayer on a network."""

    name: str
    network: str
    relayer_details: RelayerDetails

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "network": self.network,
            "relayerDetails": self.relayer_details.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CreateRelayerRequest":
        what = "create relayer request"
        data = _expect_object(data, what)
        if "relayerDetails" not in data:
            raise SerializationError(f"Invalid {what}: missing field 'relayerDetails'")
        return cls(
            name=_required_str(data, "name", what),
            network=_required_str(data, "network", what),
            relayer_details=RelayerDetails.from_dict(data["relayerDetails"]),
        )
