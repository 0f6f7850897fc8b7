"""
Serviço de Configurações do Sistema
Lê e grava as chaves de configuração, sempre mescladas com os valores padrão
"""
from typing import Any, Dict
from sqlalchemy.orm import Session
from destaque_sheq.models.configuracao import ConfiguracaoSistema
from destaque_sheq.schemas.configuracao import ConfiguracoesSistema, MODELOS_CONFIGURACAO


class ConfiguracaoService:
    """Serviço para as configurações chave/valor"""

    def obter(self, db: Session, chave: str):
        """
        Retorna a configuração validada (modelo pydantic) da chave.

        Valores gravados são mesclados sobre os padrões do modelo.

        Raises:
            KeyError: chave desconhecida
        """
        modelo = MODELOS_CONFIGURACAO[chave]
        registro = db.get(ConfiguracaoSistema, chave)
        valor = registro.valor if registro and isinstance(registro.valor, dict) else {}
        padrao = modelo().model_dump(mode="json")
        return modelo.model_validate({**padrao, **valor})

    def obter_todas(self, db: Session) -> ConfiguracoesSistema:
        return ConfiguracoesSistema(**{chave: self.obter(db, chave) for chave in MODELOS_CONFIGURACAO})

    def salvar(self, db: Session, chave: str, valor: Dict[str, Any], commit: bool = True):
        """
        Valida e grava (upsert) uma chave de configuração.

        Raises:
            KeyError: chave desconhecida
            pydantic.ValidationError: valor inválido para a chave
        """
        modelo = MODELOS_CONFIGURACAO[chave]
        validado = modelo.model_validate(valor)

        registro = db.get(ConfiguracaoSistema, chave)
        if registro is None:
            registro = ConfiguracaoSistema(chave=chave, valor=validado.model_dump(mode="json"))
            db.add(registro)
        else:
            registro.valor = validado.model_dump(mode="json")

        if commit:
            db.commit()
        return validado

    def salvar_todas(self, db: Session, configuracoes: ConfiguracoesSistema) -> ConfiguracoesSistema:
        """Grava todas as chaves em uma única transação"""
        for chave in MODELOS_CONFIGURACAO:
            self.salvar(db, chave, getattr(configuracoes, chave).model_dump(mode="json"), commit=False)
        db.commit()
        return self.obter_todas(db)


# Instância singleton
configuracao_service = ConfiguracaoService()
