import os

# Banco em memória e sem scheduler (antes de importar o app)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["ENABLE_SCHEDULED_JOBS"] = "false"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from destaque_sheq.config import settings
from destaque_sheq.core.security import hash_password, create_access_token
from destaque_sheq.database import engine, SessionLocal
from destaque_sheq.main import app
from destaque_sheq.models import Base, Usuario, PapelUsuario, Colaborador, TipoColaborador, PeriodoVotacao
from destaque_sheq.services.relatorio_service import relatorio_service

SENHA = "Senha123"
API = settings.API_V1_STR


@pytest.fixture(autouse=True)
def banco():
    Base.metadata.create_all(bind=engine)
    relatorio_service.limpar_cache()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def criar_usuario(db, email, papel=PapelUsuario.GESTOR, nome=None):
    usuario = Usuario(
        nome=nome or email.split("@")[0].title(),
        email=email,
        senha_hash=hash_password(SENHA),
        papel=papel,
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


def criar_colaborador(db, nome, tipo=TipoColaborador.FUNCIONARIO, departamento="Operações", empresa=None):
    if tipo == TipoColaborador.TERCEIRIZADO and not empresa:
        empresa = "Empresa ABC"
    colaborador = Colaborador(nome=nome, departamento=departamento, tipo=tipo, empresa=empresa)
    db.add(colaborador)
    db.commit()
    db.refresh(colaborador)
    return colaborador


def criar_periodo(db, mes="2024-01", ativo=True, finalizado=False, data_fim=None):
    ano, num = (int(p) for p in mes.split("-"))
    periodo = PeriodoVotacao(
        mes=mes,
        data_inicio=datetime(ano, num, 1),
        data_fim=data_fim or datetime(ano, num, 28, 23, 59),
        ativo=ativo,
        finalizado=finalizado,
    )
    db.add(periodo)
    db.commit()
    db.refresh(periodo)
    return periodo


def headers_para(usuario):
    token = create_access_token(usuario)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(db):
    return criar_usuario(db, "admin@odfjell.com", PapelUsuario.ADMIN, nome="Admin SHEQ")


@pytest.fixture
def gestor(db):
    return criar_usuario(db, "gestor@odfjell.com", nome="Gestor Um")


@pytest.fixture
def admin_headers(admin):
    return headers_para(admin)


@pytest.fixture
def gestor_headers(gestor):
    return headers_para(gestor)
