from adb_mcp.server import main

main()
