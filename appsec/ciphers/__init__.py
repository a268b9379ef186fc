from .aes_gcm  import AESGCMEngine
from .rsa_oaep import RSAOAEPEngine

__all__ = ["AESGCMEngine", "RSAOAEPEngine"]
