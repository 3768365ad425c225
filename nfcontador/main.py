"""
Cliente NFContador - linha de comando
=====================================

Consultas rapidas na API NFContador usando as credenciais do config.env
(NFCONTADOR_TOKEN, NFCONTADOR_CNPJ, NFCONTADOR_AMBIENTE, ...).

Uso:
    python -m nfcontador.main --config                  # Exibir configuracao
    python -m nfcontador.main --empresa 12345678000199  # Consultar empresa
    python -m nfcontador.main --empresa                 # Listar empresas
    python -m nfcontador.main --clientes                # Listar clientes
    python -m nfcontador.main --documentos 1234...      # Documentos da empresa
    python -m nfcontador.main --documento 42            # Documento especifico
    python -m nfcontador.main --solicitacao 7           # Solicitacao de emissao
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime

from nfcontador.api.client import NFContadorClient
from nfcontador.cli.commands import executar_operacao, exibir_configuracao
from nfcontador.core.config import ClientConfig, parse_ambiente
from nfcontador.core.config_validator import validar_configuracao
from nfcontador.core.exceptions import ConfigurationError
from nfcontador.core.logger import logger, setup_logging


def exibir_cabecalho() -> None:
    """Exibe cabecalho do CLI."""
    logger.info("")
    logger.info("=" * 60)
    logger.info("   CLIENTE NFCONTADOR")
    logger.info("=" * 60)
    logger.info(f"   Data/Hora: {datetime.now().strftime('%d/%m/%Y %H:%M:%S')}")
    logger.info("=" * 60)


def criar_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Cliente da API NFContador',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Exemplos:
  python -m nfcontador.main --config
  python -m nfcontador.main --empresa 12345678000199
  python -m nfcontador.main --documentos 12345678000199 --ambiente 3
  python -m nfcontador.main --documento 42 --debug
'''
    )

    parser.add_argument('--config', action='store_true',
                        help='Exibir configuracao efetiva')
    parser.add_argument('--empresa', type=str, metavar='CNPJ', nargs='?', const='',
                        help='Consultar empresa (sem CNPJ lista todas)')
    parser.add_argument('--clientes', type=str, metavar='CNPJ', nargs='?', const='',
                        help='Listar clientes sincronizados')
    parser.add_argument('--documentos', type=str, metavar='CNPJ', nargs='?', const='',
                        help='Listar documentos')
    parser.add_argument('--documento', type=str, metavar='ID',
                        help='Consultar um documento')
    parser.add_argument('--solicitacao', type=str, metavar='ID',
                        help='Consultar uma solicitacao de emissao de nota')
    parser.add_argument('--ambiente', type=str, metavar='AMBIENTE',
                        help='Ambiente (1=producao, 2=local, 3=sandbox, 4=dusk ou nome)')
    parser.add_argument('--debug', action='store_true',
                        help='Incluir diagnostico da requisicao')
    parser.add_argument('--log-level', type=str, default='INFO',
                        help='Nivel de log (default: INFO)')
    parser.add_argument('--log-dir', type=str, metavar='DIR',
                        help='Gravar log em arquivo com rotacao diaria neste diretorio')
    return parser


def criar_cliente(args: argparse.Namespace) -> NFContadorClient:
    """Cria o cliente a partir do ambiente, aplicando as opcoes do CLI."""
    config = ClientConfig.from_env()

    if args.ambiente:
        ambiente = parse_ambiente(args.ambiente)
        if ambiente is None:
            raise ConfigurationError(f"Ambiente invalido: {args.ambiente}")
        config.ambiente = ambiente
    if args.debug:
        config.debug = True
    return NFContadorClient(config)


def main(argv: list[str] | None = None) -> int:
    """Funcao principal do CLI."""
    parser = criar_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_dir=args.log_dir)
    exibir_cabecalho()

    try:
        client = criar_cliente(args)
    except ConfigurationError as e:
        logger.error(f"[ERRO] {e}")
        return 1

    with client:
        if args.config:
            return 0 if exibir_configuracao(client) else 1

        if not validar_configuracao(exigir_ambiente=not args.ambiente):
            return 1

        if args.empresa is not None:
            ok = executar_operacao("CONSULTA DE EMPRESA", lambda: client.consulta_empresa(args.empresa))
        elif args.clientes is not None:
            ok = executar_operacao("CLIENTES", lambda: client.lista_clientes(args.clientes))
        elif args.documentos is not None:
            ok = executar_operacao("DOCUMENTOS", lambda: client.lista_documentos(args.documentos))
        elif args.documento:
            ok = executar_operacao("DOCUMENTO", lambda: client.consulta_documento(args.documento))
        elif args.solicitacao:
            ok = executar_operacao(
                "SOLICITACAO DE EMISSAO",
                lambda: client.consulta_solicitacao_emissao(args.solicitacao),
            )
        else:
            parser.print_help()
            return 0

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
