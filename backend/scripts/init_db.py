"""
Script para inicializar o banco de dados.
Cria todas as tabelas e o primeiro usuário ADMIN.

Uso:
    python scripts/init_db.py --email admin@empresa.com --senha SenhaForte123 --nome "Nome Admin"
"""
import sys
import os
import argparse

# Adicionar o diretório raiz ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from destaque_sheq.database import engine, SessionLocal
from destaque_sheq.models import Base, Usuario, PapelUsuario
from destaque_sheq.core.security import hash_password


def create_tables():
    """Criar todas as tabelas no banco"""
    print("[*] Criando tabelas...")
    Base.metadata.create_all(bind=engine)
    print("[+] Tabelas criadas com sucesso!")


def create_admin_user(email: str, senha: str, nome: str, departamento: str = None) -> bool:
    """Criar o usuário ADMIN (ignora se o email já existe)"""
    db = SessionLocal()
    try:
        existing = db.query(Usuario).filter(Usuario.email == email).first()
        if existing:
            print(f"[!] Usuário com email {email} já existe ({existing.papel.value})")
            return False

        usuario = Usuario(
            nome=nome,
            email=email,
            senha_hash=hash_password(senha),
            papel=PapelUsuario.ADMIN,
            departamento=departamento
        )
        db.add(usuario)
        db.commit()
        print(f"[+] Usuário ADMIN criado: {email}")
        return True
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Inicializar banco de dados do Destaque SHEQ")
    parser.add_argument("--email", required=True, help="Email do administrador")
    parser.add_argument("--senha", required=True, help="Senha do administrador")
    parser.add_argument("--nome", required=True, help="Nome completo do administrador")
    parser.add_argument("--departamento", default=None, help="Departamento do administrador")
    parser.add_argument("--skip-tables", action="store_true", help="Pular criação de tabelas")

    args = parser.parse_args()

    print("=" * 50)
    print("INICIALIZAÇÃO DO BANCO DE DADOS - DESTAQUE SHEQ")
    print("=" * 50)

    # Validações
    if len(args.senha) < 8:
        print("[ERRO] Senha deve ter pelo menos 8 caracteres")
        sys.exit(1)

    if not args.skip_tables:
        create_tables()

    create_admin_user(args.email, args.senha, args.nome, args.departamento)

    print("=" * 50)
    print("[+] Inicialização concluída!")
    print(f"[*] Login: {args.email}")
    print("=" * 50)


if __name__ == "__main__":
    main()
