from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(plaintext):
    if not plaintext:
        raise ValueError("Password must not be empty")
    return generate_password_hash(plaintext)


def verify_password(plaintext, password_hash):
    if not isinstance(plaintext, str) or not plaintext or not password_hash:
        return False
    return check_password_hash(password_hash, plaintext)
