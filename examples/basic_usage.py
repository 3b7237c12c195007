#!/usr/bin/env python3
"""Example of retrieving ACR credentials from Python."""

import sys

from acr_credential_helper import ACRCredentialHelper, CredentialHelperError, HelperConfig, is_registry


def main(server_url):
    """Run the example.

    Args:
        server_url: Registry to fetch credentials for
    """
    if not is_registry(server_url):
        print(f"{server_url} is not an Azure Container Registry")
        return 1

    helper = ACRCredentialHelper(config=HelperConfig.from_env())
    try:
        credentials = helper.get(server_url)
    except CredentialHelperError as e:
        print(f"Error: {e}")
        return 1

    # Only a prefix of the refresh token is shown
    print(f"Username: {credentials.username}")
    print(f"Secret:   {credentials.secret[:8]}... ({len(credentials.secret)} characters)")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else "myregistry.azurecr.io"))
