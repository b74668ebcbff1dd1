from queryencoder._internal._adapters import (
    ADAPTER_TYPES,
    Adapter,
    AdapterProtocol,
    LeafAdapter,
    LeafAdapterProtocol,
    LeafValue,
    RecordAdapter,
    RecordAdapterProtocol,
    SequenceAdapter,
    SequenceAdapterProtocol,
    get_adapter,
    register_adapter,
)

__all__ = [
    "ADAPTER_TYPES",
    "Adapter",
    "AdapterProtocol",
    "LeafAdapter",
    "LeafAdapterProtocol",
    "LeafValue",
    "RecordAdapter",
    "RecordAdapterProtocol",
    "SequenceAdapter",
    "SequenceAdapterProtocol",
    "get_adapter",
    "register_adapter",
]
