"""The DES-based crypt(3) password hash used by bulletin boards."""