"""Tool descriptions shown to MCP clients."""

ADB_DEVICES = (
    "Lists all connected Android devices and emulators with their status and details. "
    "Use this tool to identify available devices for interaction, verify device connections, "
    "and obtain device identifiers needed for other ADB commands. "
    "Returns a table of device IDs with connection states (device, offline, unauthorized, etc.). "
    "Useful before running any device-specific commands to ensure the target device is connected."
)

INSPECT_UI = (
    "Captures the complete UI hierarchy of the current screen as an XML document. "
    "This provides structured XML data that can be parsed to identify UI elements and their properties. "
    "Essential for UI automation, determining current app state, and identifying interactive elements. "
    "Returns the UI structure including all elements, their IDs, text values, bounds, and clickable states. "
    "This is significantly more useful than screenshots for AI processing and automation tasks."
)

ADB_SHELL = (
    "Executes a shell command on a connected Android device or emulator. "
    "Use this for running Android system commands, managing files and permissions, "
    "controlling device settings, or interacting with Android components. "
    "Supports all standard shell commands available on Android (ls, pm, am, settings, etc.). "
    "Specify a device ID to target a specific device when multiple devices are connected."
)

ADB_INSTALL = (
    "Installs an Android application (APK) on a connected device or emulator. "
    "Use this for deploying applications, testing new builds, or updating existing apps. "
    "Provide the local path to the APK file for installation. "
    "Existing versions of the app are replaced. "
    "Specify a device ID when working with multiple connected devices."
)

ADB_LOGCAT = (
    "Retrieves Android system and application logs from a connected device. "
    "Ideal for debugging app behavior, monitoring system events, and identifying errors. "
    "Supports filtering by log tags or expressions to narrow down relevant information. "
    "Results can be limited to a specific number of lines (default 50). "
    "Use when troubleshooting crashes, unexpected behavior, or performance issues."
)

ADB_PULL = (
    "Transfers a file from a connected Android device to the server. "
    "Use this to retrieve app data files, logs, configurations, or any accessible file from the device. "
    "The file content is returned as base64-encoded data (default) or as adb's transfer message. "
    "Requires the full path to the file on the device."
)

ADB_PUSH = (
    "Transfers a file from the server to a connected Android device. "
    "Useful for uploading test data, configuration files, media content, or any file needed on the device. "
    "The file must be provided as base64-encoded content. "
    "Requires specifying the full destination path on the device where the file should be placed."
)

DUMP_IMAGE = (
    "Captures the current screen of a connected Android device. "
    "FOR HUMAN VIEWING ONLY: This tool provides a visual image that cannot be easily processed programmatically. "
    "The default behavior returns a success message. Use asBase64=true to get the PNG image as base64-encoded data. "
    "NOTE: For programmatic analysis or to identify UI elements, use inspect_ui instead."
)

ADB_ACTIVITY_MANAGER = (
    "Executes Activity Manager (am) commands on a connected Android device. "
    "Supports starting activities, broadcasting intents, force-stopping packages, and other 'am' subcommands. "
    "Specify the subcommand (e.g. 'start', 'broadcast', 'force-stop') and arguments as you would in adb shell am. "
    "Example: amCommand='start', amArgs='-a android.intent.action.VIEW -d http://www.example.com'"
)

ADB_PACKAGE_MANAGER = (
    "Executes Package Manager (pm) commands on a connected Android device. "
    "Supports listing packages, installing/uninstalling apps, managing permissions, and other 'pm' subcommands. "
    "Common commands include: 'list packages', 'install', 'uninstall', 'grant', 'revoke', 'clear', 'enable', 'disable'. "
    "Example: pmCommand='list', pmArgs='packages -3' (lists third-party packages) "
    "or pmCommand='grant', pmArgs='com.example.app android.permission.CAMERA'"
)
