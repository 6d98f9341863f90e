# flowgraph/constants.py
from __future__ import annotations

# Root children that carry no flow information.
IGNORED_ELEMENTS: tuple[str, ...] = (
    "channel",
    "bean",
    "import",
    "client",
    "errorwrapper",
)

GATEWAY_ELEMENT = "gateway"
METHOD_ELEMENT = "method"
ROUTER_ELEMENT = "router"

# Elements with one input channel and at most one output channel.
SIMPLE_ELEMENTS: tuple[str, ...] = (
    "transformer",
    "service-activator",
    "splitter",
    "aggregator",
    "header-enricher",
    "chain",
)

# Attribute names.
ATTR_NAME = "name"
ATTR_REQUEST_CHANNEL = "request-channel"
ATTR_INPUT_CHANNEL = "input-channel"
ATTR_OUTPUT_CHANNEL = "output-channel"
ATTR_FAILSAFE_OUTPUT_CHANNEL = "failsafe-outputchannel"
ATTR_EXPRESSION = "expression"

# Graph id prefixes (one counter per kind).
METHOD_ID_PREFIX = "M"
NODE_ID_PREFIX = "N"
PLACEHOLDER_ID_PREFIX = "NF"

# Click handler names the rendering side binds to.
METHOD_CLICK_HANDLER = "onGraphMethodClick"
NODE_CLICK_HANDLER = "onGraphNodeClick"

METHOD_CLASS = "node-method"
NODE_CLASS_PREFIX = "node-"
NOT_FOUND_CLASS = "node-not-found"

METHOD_LABEL_PREFIX = "[method]"
NOT_FOUND_LABEL_PREFIX = "!!! NOT FOUND !!!"

GRAPH_HEADER = "graph TD"
GROUP_TITLE_PREFIX = "XML"
SECTION_UNGROUPED = "NODES - UNGROUPED"
SECTION_EDGES = "EDGES"
SECTION_CLASSES = "CLASSES"
SECTION_CLICKS = "CLICKS"

CONFIG_FILENAME_DEFAULT = "flowgraph.yaml"
