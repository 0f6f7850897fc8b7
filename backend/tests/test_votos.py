from destaque_sheq.models import Voto, TipoColaborador

from conftest import API, criar_colaborador, criar_periodo

MEIO = [True, True, True, True, False, False, False, False]
TUDO_SIM = [True] * 8


def _cedula(funcionario, terceirizado, mes="2024-01", resp_f=MEIO, resp_t=TUDO_SIM):
    return {
        "mes": mes,
        "funcionario": {"colaborador_id": funcionario.id, "respostas": resp_f},
        "terceirizado": {"colaborador_id": terceirizado.id, "respostas": resp_t},
    }


def test_cedula_completa(client, db, gestor, gestor_headers):
    f = criar_colaborador(db, "Fernando")
    t = criar_colaborador(db, "Tatiana", TipoColaborador.TERCEIRIZADO)

    resp = client.get(f"{API}/votos/status", params={"mes": "2024-01"}, headers=gestor_headers)
    assert resp.json()["ja_votou"] is False

    resp = client.post(f"{API}/votos/cedula", json=_cedula(f, t), headers=gestor_headers)
    assert resp.status_code == 201
    votos = {v["colaborador_tipo"]: v for v in resp.json()["votos"]}
    assert votos["funcionario"]["total_sim"] == 4
    assert votos["terceirizado"]["total_sim"] == 8
    assert votos["funcionario"]["eleitor_id"] == gestor.id

    assert db.query(Voto).filter(Voto.mes == "2024-01").count() == 2
    for voto in db.query(Voto).all():
        assert voto.total_sim == sum(1 for r in voto.respostas if r)

    resp = client.get(f"{API}/votos/status", params={"mes": "2024-01"}, headers=gestor_headers)
    assert resp.json() == {"mes": "2024-01", "ja_votou": True, "funcionario": True, "terceirizado": True}

    resp = client.post(f"{API}/votos/cedula", json=_cedula(f, t), headers=gestor_headers)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Você já votou neste mês"


def test_cedula_atomica_quando_tipo_nao_confere(client, db, gestor_headers):
    f = criar_colaborador(db, "Fernando")
    outro_funcionario = criar_colaborador(db, "Otávio")

    resp = client.post(f"{API}/votos/cedula", json=_cedula(f, outro_funcionario), headers=gestor_headers)

    assert resp.status_code == 400
    assert db.query(Voto).count() == 0


def test_voto_individual_duplicado(client, db, gestor_headers):
    f = criar_colaborador(db, "Fernando")
    payload = {
        "mes": "2024-02",
        "colaborador_id": f.id,
        "colaborador_tipo": "funcionario",
        "respostas": MEIO,
    }

    assert client.post(f"{API}/votos", json=payload, headers=gestor_headers).status_code == 201

    resp = client.post(f"{API}/votos", json=payload, headers=gestor_headers)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Voto já registrado"
    assert db.query(Voto).count() == 1


def test_segundo_funcionario_no_mesmo_mes_rejeitado(client, db, gestor_headers):
    a = criar_colaborador(db, "Ana")
    b = criar_colaborador(db, "Bruno")
    base = {"mes": "2024-02", "colaborador_tipo": "funcionario", "respostas": MEIO}

    assert client.post(f"{API}/votos", json={**base, "colaborador_id": a.id}, headers=gestor_headers).status_code == 201
    resp = client.post(f"{API}/votos", json={**base, "colaborador_id": b.id}, headers=gestor_headers)

    assert resp.status_code == 409


def test_colaborador_inexistente(client, gestor_headers):
    payload = {"mes": "2024-02", "colaborador_id": 999, "colaborador_tipo": "funcionario", "respostas": MEIO}

    resp = client.post(f"{API}/votos", json=payload, headers=gestor_headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Colaborador não encontrado"


def test_respostas_precisam_ter_oito_itens(client, db, gestor_headers):
    f = criar_colaborador(db, "Fernando")
    payload = {"mes": "2024-02", "colaborador_id": f.id, "colaborador_tipo": "funcionario", "respostas": [True] * 7}

    resp = client.post(f"{API}/votos", json=payload, headers=gestor_headers)

    assert resp.status_code == 422


def test_mes_invalido(client, db, gestor_headers):
    f = criar_colaborador(db, "Fernando")
    payload = {"mes": "2024-13", "colaborador_id": f.id, "colaborador_tipo": "funcionario", "respostas": MEIO}

    assert client.post(f"{API}/votos", json=payload, headers=gestor_headers).status_code == 422


def test_periodo_finalizado_rejeita_voto(client, db, gestor_headers):
    criar_periodo(db, "2024-01", ativo=False, finalizado=True)
    f = criar_colaborador(db, "Fernando")
    t = criar_colaborador(db, "Tatiana", TipoColaborador.TERCEIRIZADO)

    resp = client.post(f"{API}/votos/cedula", json=_cedula(f, t), headers=gestor_headers)

    assert resp.status_code == 400
    assert db.query(Voto).count() == 0


def test_perguntas(client, gestor_headers):
    resp = client.get(f"{API}/votos/perguntas", headers=gestor_headers)

    perguntas = resp.json()
    assert len(perguntas) == 8
    assert perguntas[0]["numero"] == 1


def test_admin_lista_e_exclui_votos_do_mes(client, db, admin_headers, gestor_headers):
    f = criar_colaborador(db, "Fernando")
    t = criar_colaborador(db, "Tatiana", TipoColaborador.TERCEIRIZADO)
    client.post(f"{API}/votos/cedula", json=_cedula(f, t), headers=gestor_headers)

    assert client.get(f"{API}/votos", headers=gestor_headers).status_code == 403

    resp = client.get(f"{API}/votos", params={"mes": "2024-01"}, headers=admin_headers)
    assert resp.json()["total"] == 2

    resp = client.delete(f"{API}/votos/mes/2024-01", headers=admin_headers)
    assert resp.json() == {"mes": "2024-01", "votos_removidos": 2}
    assert db.query(Voto).count() == 0


def test_sem_token(client):
    resp = client.get(f"{API}/votos/perguntas")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token de autenticação não fornecido"
