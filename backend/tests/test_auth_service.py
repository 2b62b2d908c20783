from siswa_directory.services.auth import HASH_ALGORITHM, hash_password, verify_password


def test_hash_is_salted_and_self_describing():
    first = hash_password("secret1", iterations=1000)
    second = hash_password("secret1", iterations=1000)

    assert first != second
    assert first.startswith(f"{HASH_ALGORITHM}$1000$")
    assert "secret1" not in first


def test_verify_password():
    encoded = hash_password("secret1", iterations=1000)

    assert verify_password("secret1", encoded)
    assert not verify_password("secret2", encoded)


def test_verify_rejects_malformed_hashes():
    assert not verify_password("secret1", None)
    assert not verify_password("secret1", "")
    assert not verify_password("secret1", "plain-text")
    assert not verify_password("secret1", "md5$1000$abc$def")
    assert not verify_password("secret1", f"{HASH_ALGORITHM}$zero$abc$def")
