from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from destaque_sheq.config import settings
from destaque_sheq.middleware.auth_middleware import AuthMiddleware
from destaque_sheq.api.routes import (
    auth, setup, usuarios, colaboradores, periodos, votos, resultados,
    relatorios, certificados, notificacoes, configuracoes, admin
)

VERSION = "1.0.0"

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Middleware de autenticação (JWT -> request.state)
app.add_middleware(AuthMiddleware)


# Rota de health check
@app.get("/health")
def health_check():
    """Health check para monitoramento"""
    return {"status": "healthy"}


# Endpoint de versão simples (sem dependências)
@app.get(f"{settings.API_V1_STR}/version")
def get_api_version():
    """Retorna versão do backend para verificar deploy"""
    return {"version": VERSION, "status": "ok"}


@app.get("/")
def root():
    return {
        "message": "Destaque SHEQ API",
        "version": VERSION,
        "environment": settings.ENVIRONMENT
    }


# Incluir routers
app.include_router(auth.router, prefix=f"{settings.API_V1_STR}/auth", tags=["auth"])
app.include_router(setup.router, prefix=f"{settings.API_V1_STR}/setup", tags=["setup"])
app.include_router(usuarios.router, prefix=f"{settings.API_V1_STR}/usuarios", tags=["usuarios"])
app.include_router(colaboradores.router, prefix=f"{settings.API_V1_STR}/colaboradores", tags=["colaboradores"])
app.include_router(periodos.router, prefix=f"{settings.API_V1_STR}/periodos", tags=["periodos"])
app.include_router(votos.router, prefix=f"{settings.API_V1_STR}/votos", tags=["votos"])
app.include_router(resultados.router, prefix=f"{settings.API_V1_STR}/resultados", tags=["resultados"])
app.include_router(relatorios.router, prefix=f"{settings.API_V1_STR}/relatorios", tags=["relatorios"])
app.include_router(certificados.router, prefix=f"{settings.API_V1_STR}/certificados", tags=["certificados"])
app.include_router(notificacoes.router, prefix=f"{settings.API_V1_STR}/notificacoes", tags=["notificacoes"])
app.include_router(configuracoes.router, prefix=f"{settings.API_V1_STR}/configuracoes", tags=["configuracoes"])
app.include_router(admin.router, prefix=f"{settings.API_V1_STR}/admin", tags=["admin"])


# Evento de startup (tabelas e jobs agendados)
@app.on_event("startup")
def startup_event():
    print(f"[STARTUP] {settings.PROJECT_NAME} iniciado!")
    print(f"[STARTUP] Documentacao: http://localhost:8000/docs")
    print(f"[STARTUP] Ambiente: {settings.ENVIRONMENT}")

    # Criar tabelas do banco de dados automaticamente
    try:
        from destaque_sheq.database import engine
        from destaque_sheq.models import Base
        Base.metadata.create_all(bind=engine)
        print("[STARTUP] Tabelas do banco de dados criadas/verificadas!")
    except Exception as e:
        print(f"[STARTUP] Erro ao criar tabelas: {e}")

    # Lembrete diário da votação
    # Pode ser desabilitado com ENABLE_SCHEDULED_JOBS=false
    if settings.ENABLE_SCHEDULED_JOBS:
        try:
            from destaque_sheq.jobs.notificacao_job import iniciar_scheduler
            iniciar_scheduler(hora=settings.NOTIFICATION_CHECK_HOUR)
            print(f"[STARTUP] Job de lembrete iniciado (diariamente às {settings.NOTIFICATION_CHECK_HOUR}h)")
        except Exception as e:
            print(f"[STARTUP] Erro ao iniciar job de lembrete: {e}")


@app.on_event("shutdown")
def shutdown_event():
    # Parar scheduler se estiver rodando
    from destaque_sheq.jobs.notificacao_job import parar_scheduler
    parar_scheduler()
    print("[SHUTDOWN] Sistema encerrado!")
