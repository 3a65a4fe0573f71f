"""
PEM/DER key parsing and RSA PKCS#1 v1.5 signatures.

pem     - header line and base64 body
der     - DER SEQUENCE reading and key field layouts
parser  - RSAKeyParser façade
sign    - Signer, Verifier, DigestScheme
"""
