from app import create_app
from models import ROLES
from modules.users.store import UserStore

app = create_app()


def create_user(username, password, firstname, lastname, role, age=None):
    with app.app_context():
        store = UserStore()
        existing_user = store.find_by_username(username)
        if existing_user:
            print(f"User '{username}' already exists with role '{existing_user.role}'.")
            return None

        payload = {
            "username": username,
            "password": password,
            "firstname": firstname,
            "lastname": lastname,
            "age": age,
        }
        result = store.create_user(payload, require_password=True, role=role)
        if not result.ok:
            for field, messages in result.errors.items():
                print(f"{field}: {', '.join(messages)}")
            return None

        print(f"Created user: {result.user.username} (role: {role})")
        print(f"Auth token: {result.user.auth_token}")
        return result.user.id


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Create a new API user.')
    parser.add_argument('username', help='Username')
    parser.add_argument('password', help='Password')
    parser.add_argument('--firstname', default='Admin', help='First name')
    parser.add_argument('--lastname', default='User', help='Last name')
    parser.add_argument('--age', type=int, default=None, help='Age')
    parser.add_argument('--role', choices=list(ROLES), default='user', help='User role')

    args = parser.parse_args()
    create_user(args.username, args.password, args.firstname, args.lastname, args.role, args.age)
