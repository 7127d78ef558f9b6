import importlib
import inspect

import pytest

# Mapping of module -> (ProtocolName, required_methods: {name: arity})
PORT_PROTOCOLS = {
    "patternkit.ports.clock": ("Clock", {"now": 0}),
    "patternkit.ports.settings_store": ("SettingsStore", {"update": 2, "retrieve": 1}),
    "patternkit.ports.location_provider": ("LocationProvider", {"provide_raw_location": 0}),
    "patternkit.ports.shape_creator": ("ShapeCreator", {"create": 0}),
    "patternkit.ports.telemetry": ("Telemetry", {"log": -1}),  # variable kwargs
}

# Concrete adapters that must satisfy the ports above
IMPLEMENTATIONS = [
    ("patternkit.adapters.json_settings_store", "JsonSettingsStore", "patternkit.ports.settings_store"),
    ("patternkit.adapters.jsonl_telemetry", "JsonlTelemetry", "patternkit.ports.telemetry"),
    ("patternkit.adapters.jsonl_telemetry", "NullTelemetry", "patternkit.ports.telemetry"),
    ("patternkit.adapters.jsonl_telemetry", "SystemClock", "patternkit.ports.clock"),
    ("patternkit.geo.adapter", "FixedLocationProvider", "patternkit.ports.location_provider"),
    ("patternkit.shapes.shapes", "OvalCreator", "patternkit.ports.shape_creator"),
    ("patternkit.shapes.shapes", "BoxCreator", "patternkit.ports.shape_creator"),
]


@pytest.mark.parametrize("module_name", PORT_PROTOCOLS)
def test_all_ports_import(module_name):
    assert importlib.import_module(module_name)


@pytest.mark.parametrize("module_name,meta", PORT_PROTOCOLS.items())
def test_required_port_signatures(module_name, meta):
    proto_name, methods = meta
    module = importlib.import_module(module_name)
    proto = getattr(module, proto_name)
    assert inspect.isclass(proto), f"{proto_name} not a class"
    for method_name, arity in methods.items():
        fn = getattr(proto, method_name, None)
        assert fn is not None, f"Missing method {method_name} on {proto_name}"
        if arity >= 0:
            sig = inspect.signature(fn)
            # remove self / cls
            params = [p for p in sig.parameters.values() if p.kind == p.POSITIONAL_OR_KEYWORD][1:]
            assert (
                len(params) == arity
            ), f"{proto_name}.{method_name} expected {arity} args got {len(params)}"


@pytest.mark.parametrize("impl_module,impl_name,port_module", IMPLEMENTATIONS)
def test_adapters_provide_port_methods(impl_module, impl_name, port_module):
    impl = getattr(importlib.import_module(impl_module), impl_name)
    proto_name, methods = PORT_PROTOCOLS[port_module]
    for method_name in methods:
        assert callable(
            getattr(impl, method_name, None)
        ), f"{impl_name} does not implement {proto_name}.{method_name}"
