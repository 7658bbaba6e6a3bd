import getpass
import sys

from app.admin.auth import BCRYPT_MAX_PASSWORD_BYTES
from app.core.utils import hash_password


def main() -> int:
    password = getpass.getpass("관리자 비밀번호: ")
    if not password:
        print("❗️비밀번호가 비어 있습니다.")
        return 1
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        print(f"❗️비밀번호는 {BCRYPT_MAX_PASSWORD_BYTES}바이트 이하여야 합니다.")
        return 1
    if getpass.getpass("비밀번호 확인: ") != password:
        print("❗️비밀번호가 일치하지 않습니다.")
        return 1

    hashed_pw = hash_password(password)
    print("✅ .env 에 아래 값을 설정하세요 ($ 문자는 따옴표로 감싸기)")
    print(f"ADMIN_PASSWORD_HASH='{hashed_pw}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())


'''
PYTHONPATH=. python app/scripts/hash_admin_password.py
'''
