from sqlalchemy.orm import Session

from roomivo.db.models.role import Role as RoleModel


def get_all_roles(db: Session) -> list[RoleModel]:
    return db.query(RoleModel).order_by(RoleModel.id).all()


def get_role_by_name(db: Session, name: str) -> RoleModel | None:
    return db.query(RoleModel).filter(RoleModel.name == name).first()
