"""
SealedText - Main Entry Point
Walks two parties through sealing and opening a message.
"""

from .errors import AuthenticationFailed
from .core_crypto.key_agreement import KeyPair
from .integration.event_logger import EventLogger
from .messaging.envelope import b64d, b64e
from .messaging.sealer import MessageSealer


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "=" * 50)
    print(f"  {title}")
    print("=" * 50)


def main():
    """Main entry point for the SealedText demo."""
    print_header("Welcome to SealedText")

    audit = EventLogger()
    sealer = MessageSealer(event_logger=audit)
    salt = "demo-conversation"

    alice = KeyPair.generate()
    bob = KeyPair.generate()
    print(f"\n  Alice public key: {alice.raw_public_bytes().hex()[:32]}...")
    print(f"  Bob public key:   {bob.raw_public_bytes().hex()[:32]}...")

    print_header("Alice seals a message for Bob")
    envelope = sealer.seal_text("hello", alice, bob.public_key, salt)
    print(f"\n  Envelope: {envelope}")

    print_header("Bob opens it")
    plaintext = sealer.open_text(envelope, bob, alice.public_key, salt)
    print(f"\n  Plaintext: {plaintext!r}")

    print_header("Mallory flips one bit")
    blob = bytearray(b64d(envelope))
    blob[-1] ^= 0x01
    try:
        sealer.open_text(b64e(bytes(blob)), bob, alice.public_key, salt)
    except AuthenticationFailed as exc:
        print(f"\n  Rejected: {exc.kind.value}")

    print()
    audit.print_audit_log()


if __name__ == "__main__":
    main()
