from passlib.hash import bcrypt

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _truncate(password: str) -> str:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES].decode("utf-8", errors="ignore")


class PasswordHandler:
    @staticmethod
    def hash(password: str) -> str:
        return bcrypt.hash(_truncate(password))

    @staticmethod
    def verify(password: str, password_hash: str) -> bool:
        return bcrypt.verify(_truncate(password), password_hash)
