"""Table-driven reads and writes over a feature catalogue.

Reads issue one request per selected feature, in catalogue order, and stop
at the first transport error. Writes attempt every feature independently:
a failed feature is logged and left out of the result, the rest still go out.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pypowerlink.exceptions import InvalidArgumentError
from pypowerlink.registers.features import FeatureDefinition, Primitive, select_features
from pypowerlink.transports.exceptions import TransportError
from pypowerlink.transports.protocol import PowerlinkTransport

_LOGGER = logging.getLogger(__name__)


async def _read_raw(
    transport: PowerlinkTransport,
    feature: FeatureDefinition,
    address: int,
    count: int,
) -> list[Any]:
    primitive = feature.primitive
    if primitive is Primitive.COILS:
        return await transport.read_coils(address, count)
    if primitive is Primitive.DISCRETE_INPUTS:
        return await transport.read_discrete_inputs(address, count)
    if primitive is Primitive.INPUT_REGISTERS:
        return await transport.read_input_registers(address, count)
    if primitive is Primitive.HOLDING_REGISTERS:
        return await transport.read_holding_registers(address, count)
    if primitive is Primitive.FILE_RECORDS and feature.file_number is not None:
        return await transport.read_file_records(feature.file_number, address, count)
    raise ValueError(f"Feature {feature.name} cannot be read via {primitive}")


async def _write_raw(
    transport: PowerlinkTransport,
    feature: FeatureDefinition,
    address: int,
    values: list[Any],
) -> None:
    primitive = feature.primitive
    if primitive is Primitive.COILS:
        await transport.write_coils(address, values)
    elif primitive is Primitive.HOLDING_REGISTERS:
        await transport.write_registers(address, values)
    elif primitive is Primitive.FILE_RECORDS and feature.file_number is not None:
        await transport.write_file_records(feature.file_number, address, values)
    else:
        raise ValueError(f"Feature {feature.name} cannot be written via {primitive}")


async def read_features(
    transport: PowerlinkTransport,
    features: Sequence[FeatureDefinition],
    *,
    bus: int,
    start: int,
    quantity: int,
    fields: Sequence[str] | None = None,
) -> list[dict[str, Any]]:
    """Read the selected features for ``quantity`` consecutive items.

    Args:
        transport: Connected transport
        features: Catalogue to read from (breaker or bus)
        bus: Bus index of the first item
        start: Breaker position of the first item (ignored for bus features)
        quantity: Number of items, already clamped by the caller
        fields: Feature names to return; empty or None for all

    Returns:
        One dict per item holding only the selected features and their labels

    Raises:
        TransportError: On the first failed request; later features are not read
    """
    entries: list[dict[str, Any]] = [{} for _ in range(quantity)]
    if quantity <= 0:
        return entries

    for feature in select_features(features, fields):
        if feature.primitive is Primitive.COMPUTED and feature.compute is not None:
            items = [{feature.name: value} for value in feature.compute(bus, start, quantity)]
        elif feature.decode is not None:
            address = feature.address(bus, start)
            raw = await _read_raw(transport, feature, address, quantity * feature.words_per_item)
            items = feature.decode(feature.name, raw)
        else:
            continue

        for entry, item in zip(entries, items, strict=False):
            if feature.group:
                entry.setdefault(feature.group, {}).update(item)
            else:
                entry.update(item)

    return entries


def writable_features(
    features: Sequence[FeatureDefinition],
    info: Sequence[Mapping[str, Any]],
) -> list[FeatureDefinition]:
    """Writable features named in the first entry of ``info``.

    Raises:
        InvalidArgumentError: If a selected feature is missing from a later entry
    """
    if not info:
        return []
    selected = [f for f in features if f.writable and f.name in info[0]]
    for feature in selected:
        missing = [index for index, entry in enumerate(info) if feature.name not in entry]
        if missing:
            raise InvalidArgumentError(
                f"'{feature.name}' is set on the first entry but missing from entries {missing}"
            )
    return selected


async def write_features(
    transport: PowerlinkTransport,
    features: Sequence[FeatureDefinition],
    *,
    bus: int,
    start: int,
    info: Sequence[Mapping[str, Any]],
) -> list[str]:
    """Write each selected feature, isolating failures per feature.

    The caller is responsible for validating ``info`` (see
    :func:`writable_features`) and for the surrounding write session.

    Returns:
        Names of the features that were written successfully
    """
    written: list[str] = []
    for feature in features:
        if feature.encode is None:
            continue
        values = feature.encode([entry[feature.name] for entry in info])
        address = feature.address(bus, start)
        try:
            await _write_raw(transport, feature, address, values)
        except TransportError as err:
            _LOGGER.error(
                "Failed to write %s for bus %d breaker %d (address %d): %s",
                feature.name,
                bus,
                start,
                address,
                err,
            )
            continue
        written.append(feature.name)
    return written
