"""
Key pair and tunnel containers.

A KeyPair owns its two KeyMaterial instances and wipes both when disposed.
Pairs are not checked for public == private * G here; generators produce
matching pairs, while hand-assembled pairs (e.g. deliberately mismatched
ones for negative tests) are taken as-is.
"""

from typing import TYPE_CHECKING, List, Optional, Union

from wgkeys.crypto.key_material import BytesLike, KeyMaterial

if TYPE_CHECKING:
    from wgkeys.crypto.generators import KeyPairGenerator


def _default_generator() -> "KeyPairGenerator":
    from wgkeys.crypto.generators import get_key_pair_generator

    return get_key_pair_generator()


class KeyPair:
    """
    X25519 key pair container.

    Attributes:
        private_key: Private scalar (KEEP SECRET)
        public_key: Public point (safe to share)
    """

    def __init__(self, private_key: KeyMaterial, public_key: KeyMaterial):
        if private_key is None or public_key is None:
            raise ValueError("KeyPair requires both a private and a public key")
        self.private_key = private_key
        self.public_key = public_key

    @classmethod
    def create(cls, private_key: KeyMaterial, public_key: KeyMaterial) -> "KeyPair":
        return cls(private_key, public_key)

    @classmethod
    def create_random(cls, generator: Optional["KeyPairGenerator"] = None) -> "KeyPair":
        """Generate a fresh pair with the given (or configured) generator."""
        return (generator or _default_generator()).generate_random()

    @classmethod
    def create_from_private(
        cls,
        private_key: Union[KeyMaterial, BytesLike],
        generator: Optional["KeyPairGenerator"] = None,
    ) -> "KeyPair":
        """Derive the public key for an existing private key."""
        return (generator or _default_generator()).generate_from_private(private_key)

    @property
    def is_valid(self) -> bool:
        return self.private_key.is_valid and self.public_key.is_valid

    def describe(self) -> str:
        """Human-readable dump of both keys. Diagnostics only."""
        return f"PrivateKey: {self.private_key.encoded()}\nPublicKey: {self.public_key.encoded()}"

    def dispose(self) -> None:
        self.private_key.dispose()
        self.public_key.dispose()

    def __enter__(self) -> "KeyPair":
        return self

    def __exit__(self, *_) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"<KeyPair {'valid' if self.is_valid else 'disposed'}>"


class Tunnel:
    """
    Key set for one point-to-point WireGuard tunnel.

    Holds one key pair per direction plus a symmetric preshared key.
    """

    def __init__(
        self,
        server_to_client: KeyPair,
        client_to_server: KeyPair,
        preshared_key: KeyMaterial,
    ):
        if server_to_client is None:
            raise ValueError("server_to_client key pair is required")
        if client_to_server is None:
            raise ValueError("client_to_server key pair is required")
        if preshared_key is None:
            raise ValueError("preshared_key is required")

        self.server_to_client = server_to_client
        self.client_to_server = client_to_server
        self.preshared_key = preshared_key

    @classmethod
    def create(
        cls,
        server_to_client: KeyPair,
        client_to_server: KeyPair,
        preshared_key: KeyMaterial,
    ) -> "Tunnel":
        return cls(server_to_client, client_to_server, preshared_key)

    @classmethod
    def create_random(cls, generator: Optional["KeyPairGenerator"] = None) -> "Tunnel":
        generator = generator or _default_generator()
        created: List[KeyPair] = []
        try:
            created.append(generator.generate_random())
            created.append(generator.generate_random())
            preshared_key = KeyMaterial.create_random()
        except Exception:
            for pair in created:
                pair.dispose()
            raise
        server_to_client, client_to_server = created
        return cls(server_to_client, client_to_server, preshared_key)

    @classmethod
    def create_many(cls, count: int, generator: Optional["KeyPairGenerator"] = None) -> List["Tunnel"]:
        if count < 0:
            raise ValueError("count must be non-negative")
        generator = generator or _default_generator()
        return [cls.create_random(generator) for _ in range(count)]

    def describe(self) -> str:
        return (
            f"ServerToClient:\n{self.server_to_client.describe()}\n"
            f"ClientToServer:\n{self.client_to_server.describe()}\n"
            f"PreSharedKey: {self.preshared_key.encoded()}"
        )

    def dispose(self) -> None:
        self.server_to_client.dispose()
        self.client_to_server.dispose()
        self.preshared_key.dispose()

    def __enter__(self) -> "Tunnel":
        return self

    def __exit__(self, *_) -> None:
        self.dispose()
