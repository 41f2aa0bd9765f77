# List access points and their (B)SSIDs from an ExtremeCloud Appliance.

TOOL_NAME = "xca-bssidlister"
__version__ = "0.2.0"
TOOL_ID = f"{TOOL_NAME}/{__version__}"
TOOL_URL = "https://gitlab.com/rbrt-weiler/xca-rest-bssidlister-go"
