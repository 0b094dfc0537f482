from nagarconnect.core.security import hash_password
from nagarconnect.models.issue import Issue
from nagarconnect.models.user import AdminUser, LanguageType, User

ADMIN_EMAIL = "admin@example.com"
PASSWORD = "secret123"


def create_user(db, email="citizen@example.com", admin=False, language="en"):
    user = User(email=email, password_hash=hash_password(PASSWORD), language=LanguageType(language))
    db.add(user)
    if admin:
        db.add(AdminUser(user_id=user.id))
    db.commit()
    db.refresh(user)
    return user


def create_issue(db, user, title="Pothole on MG Road", **fields):
    issue = Issue(user_id=user.id, user_email=user.email, title=title, **fields)
    db.add(issue)
    db.commit()
    db.refresh(issue)
    return issue


def signup(client, email="citizen@example.com", **extra):
    response = client.post("/auth/signup", json={"email": email, "password": PASSWORD, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}
