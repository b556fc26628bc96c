from cloud_mcp.main import cli

if __name__ == "__main__":
    cli()
