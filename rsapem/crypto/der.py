"""
DER sequence reading and positional RSA key field extraction.

Tokenizing is done by pyasn1 without a schema: a SEQUENCE comes back as
univ.Sequence (mixed children) or univ.SequenceOf (all children of one
type), INTEGER as univ.Integer, and so on. Layouts below pick children by
position, so the four supported encodings can be read side by side.
"""
import logging
from typing import Dict, NamedTuple, Optional, Tuple

from pyasn1.codec.der import decoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import base, univ

from rsapem.common.errors import KeyStructureError

logger = logging.getLogger(__name__)

RSA_ENCRYPTION_OID = (1, 2, 840, 113549, 1, 1, 1)
RSASSA_PSS_OID = (1, 2, 840, 113549, 1, 1, 10)
RSA_ALGORITHM_OIDS = (RSA_ENCRYPTION_OID, RSASSA_PSS_OID)


class KeyLayout(NamedTuple):
    """
    Where the key fields live inside a SEQUENCE.

    Either `fields` maps logical names to INTEGER positions, or
    `payload_index` names the BIT STRING / OCTET STRING child that holds
    a nested DER SEQUENCE to be read with `inner`.
    """
    name: str
    fields: Tuple[Tuple[str, int], ...] = ()
    payload_index: Optional[int] = None
    algorithm_index: Optional[int] = None
    inner: Optional["KeyLayout"] = None


# RSAPublicKey ::= SEQUENCE { modulus, publicExponent }
PKCS1_PUBLIC = KeyLayout(
    name="PKCS#1 RSAPublicKey",
    fields=(("modulus", 0), ("public_exponent", 1)),
)

# RSAPrivateKey ::= SEQUENCE { version, modulus, publicExponent, privateExponent,
#                              prime1, prime2, exponent1, exponent2, coefficient }
PKCS1_PRIVATE = KeyLayout(
    name="PKCS#1 RSAPrivateKey",
    fields=(("modulus", 1), ("private_exponent", 3), ("prime_p", 4), ("prime_q", 5)),
)

# SubjectPublicKeyInfo ::= SEQUENCE { algorithm, subjectPublicKey BIT STRING }
PKCS8_PUBLIC = KeyLayout(
    name="SubjectPublicKeyInfo",
    payload_index=1,
    algorithm_index=0,
    inner=PKCS1_PUBLIC,
)

# PrivateKeyInfo ::= SEQUENCE { version, privateKeyAlgorithm, privateKey OCTET STRING }
PKCS8_PRIVATE = KeyLayout(
    name="PrivateKeyInfo",
    payload_index=2,
    algorithm_index=1,
    inner=PKCS1_PRIVATE,
)


def _has_tag(node, asn1_type) -> bool:
    return isinstance(node, base.Asn1Item) and node.tagSet == asn1_type.tagSet


def _type_name(node) -> str:
    return node.__class__.__name__


def read_sequence(der: bytes):
    """
    Tokenize DER bytes and return the top-level SEQUENCE node.

    Bytes after the first complete element are ignored.

    Raises:
        KeyStructureError: if the bytes do not tokenize or the top-level
            node is not a SEQUENCE
    """
    if not der:
        raise KeyStructureError("Empty DER input: expected a SEQUENCE")
    try:
        node, rest = decoder.decode(bytes(der))
    except PyAsn1Error as e:
        raise KeyStructureError(f"Malformed DER: {e}") from e

    if not _has_tag(node, univ.Sequence):
        raise KeyStructureError(f"Expected a top-level SEQUENCE, got {_type_name(node)}")
    if rest:
        logger.debug("Ignoring %d trailing byte(s) after DER SEQUENCE", len(rest))
    return node


def element(sequence, index: int, asn1_type):
    """
    Child at `index`, which must exist and carry the tag of `asn1_type`.

    Raises:
        KeyStructureError: index out of range or type mismatch
    """
    if index >= len(sequence):
        raise KeyStructureError(
            f"SEQUENCE has {len(sequence)} element(s), element {index} is required"
        )
    node = sequence[index]
    if not _has_tag(node, asn1_type):
        raise KeyStructureError(
            f"Element {index} is {_type_name(node)}, expected {asn1_type.__name__}"
        )
    return node


def integer_field(sequence, index: int) -> int:
    """
    Read an INTEGER child as an unsigned value.

    DER integers are signed; the leading zero that keeps a high bit
    positive is consumed by the tokenizer. A value that still comes out
    negative (or zero) is not a valid RSA key component.
    """
    value = int(element(sequence, index, univ.Integer))
    if value <= 0:
        raise KeyStructureError(f"Element {index} must be a positive INTEGER")
    return value


def payload_field(sequence, index: int) -> bytes:
    """
    Bytes of a BIT STRING or OCTET STRING child that wraps nested DER.

    A BIT STRING must have no unused bits; pyasn1 already drops the
    unused-bit count octet.
    """
    if index >= len(sequence):
        raise KeyStructureError(
            f"SEQUENCE has {len(sequence)} element(s), element {index} is required"
        )
    node = sequence[index]
    if _has_tag(node, univ.BitString):
        if len(node) % 8:
            raise KeyStructureError(f"BIT STRING at element {index} has unused bits")
        return node.asOctets()
    if _has_tag(node, univ.OctetString):
        return node.asOctets()
    raise KeyStructureError(
        f"Element {index} is {_type_name(node)}, expected BitString or OctetString"
    )


def check_rsa_algorithm(sequence, index: int) -> None:
    """AlgorithmIdentifier at `index` must name an RSA key."""
    algorithm = element(sequence, index, univ.Sequence)
    oid = element(algorithm, 0, univ.ObjectIdentifier)
    if oid.asTuple() not in RSA_ALGORITHM_OIDS:
        raise KeyStructureError(f"Not an RSA key (algorithm {oid})")


def extract_fields(sequence, layout: KeyLayout) -> Dict[str, int]:
    """
    Pull the integer key fields described by `layout` out of `sequence`.

    Wrapping layouts (PKCS#8) read their payload child as a fresh DER
    SEQUENCE and continue with the inner layout.

    Returns:
        Mapping of field name → unsigned integer value
    """
    if layout.inner is not None:
        if layout.algorithm_index is not None:
            check_rsa_algorithm(sequence, layout.algorithm_index)
        nested = read_sequence(payload_field(sequence, layout.payload_index))
        return extract_fields(nested, layout.inner)

    return {name: integer_field(sequence, index) for name, index in layout.fields}
