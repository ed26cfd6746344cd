#!/usr/bin/env python3
"""
GXAccount SDK - Usage Example

Demonstrates how to use the SDK for common operations.
"""

from gxaccount import AccountService, GXAccountError, generate_key_pair

def main():
    print("=" * 60)
    print("GXAccount SDK Example")
    print("=" * 60)

    try:
        service = AccountService.from_config("config.json")
        print("✓ Service initialized")
    except (FileNotFoundError, GXAccountError) as e:
        print(f"✗ Failed to initialize: {e}")
        return

    # Offline key generation
    print("\n=== New Key Pair ===")
    pair = generate_key_pair()
    print(f"Public key: {pair.public_key}")
    print("Brain key and WIF are not printed; store them offline.")

    # Account lookup
    print("\n=== Account Lookup ===")
    try:
        account = service.resolve_account("nathan")
        print(f"nathan -> {account.id}")
    except GXAccountError as e:
        print(f"✗ Lookup failed: {e}")
        return

    # Application status
    print("\n=== Certification Status ===")
    try:
        status = service.is_applying("development", account.name)
        print(f"Status: {status}")
    except GXAccountError as e:
        print(f"✗ Status query failed: {e}")

    # Example: Register an account
    print("\n=== Register Account (Demo) ===")
    print("To register an account, use:")
    print('  creds = service.create_account("production", "merchant", "alice")')
    print('  print(f"Account: {creds.account_name}")')

    # Example: Apply for certification
    print("\n=== Apply for Certification (Demo) ===")
    print("To apply as a merchant, use:")
    print('  service.apply_merchant("production", {"name": "Alice Shop"}, "alice", "merchant")')
    print("To apply as a data source, use:")
    print('  service.apply_datasource("production", {"name": "Feed"}, "alice", "datasource")')

    print("\n" + "=" * 60)
    print("SDK ready for use!")
    print("=" * 60)


if __name__ == "__main__":
    main()
