from testrail_cli.mcp_server import main

main()
