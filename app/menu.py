"""Menu interativo de terminal para o cadastro de alunos.

Responsabilidades:
- Ler opções e valores do usuário
- Delegar cadastro, consulta e avaliação aos serviços
- Salvar a base ao sair
"""

from src.application.assessment_service import ServicoAvaliacao
from src.application.student_service import ResultadoOperacao, ServicoEstudantes
from src.config.settings import Configuracoes
from src.domain.errors import ErroMatriculaDuplicada, ErroPersistencia, ErroRegistroNaoEncontrado
from src.domain.student import INT32_MAX, INT32_MIN, Estudante, validar_notas_e_frequencia
from src.util.logger import logger


SEPARADOR = "-" * 50

OPCOES_MENU = """
=== Sistema de Registro de Alunos ===
1. Adicionar aluno
2. Atualizar aluno
3. Remover aluno
4. Buscar aluno
5. Listar todos os alunos
6. Análise por IA (risco + sugestão de carreira)
7. Sair
----------------------------------------"""


def ler_inteiro(mensagem: str, minimo: int = INT32_MIN, maximo: int = INT32_MAX) -> int:
    """Pergunta até receber um inteiro válido dentro de [minimo, maximo]."""
    while True:
        texto = input(mensagem).strip()
        try:
            valor = int(texto)
        except ValueError:
            print("Inteiro inválido, tente novamente.")
            continue
        if minimo <= valor <= maximo:
            return valor
        print(f"Valor fora da faixa [{minimo}, {maximo}], tente novamente.")


def ler_decimal(mensagem: str) -> float:
    """Pergunta até receber um número válido."""
    while True:
        texto = input(mensagem).strip()
        try:
            return float(texto)
        except ValueError:
            print("Número inválido, tente novamente.")


def ler_decimal_opcional(mensagem: str, atual: float) -> float:
    """Lê um número; vazio ou inválido mantém o valor atual."""
    texto = input(mensagem).strip()
    if not texto:
        return atual
    try:
        return float(texto)
    except ValueError:
        print(f"Entrada inválida, mantendo valor anterior {atual:.2f}")
        return atual


def exibir_estudante(estudante: Estudante) -> None:
    print(SEPARADOR)
    print(f"Nome       : {estudante.name}")
    print(f"Matrícula  : {estudante.roll}")
    print(f"Frequência : {estudante.attendance:.2f}%")
    for disciplina, nota in zip(Configuracoes.DISCIPLINAS, estudante.marks):
        print(f"{disciplina:<14}: {nota:.2f}")
    print(f"Média      : {estudante.media():.2f}")
    print(f"Reprovações: {estudante.contar_abaixo(Configuracoes.NOTA_MINIMA_APROVACAO)}")
    print(SEPARADOR)


def _avisar_persistencia(resultado: ResultadoOperacao) -> None:
    if not resultado.persistido:
        print("Aviso: falha ao salvar a base no arquivo.")


def adicionar_aluno(servico: ServicoEstudantes) -> None:
    matricula = ler_inteiro("Informe a matrícula: ")
    nome = input("Informe o nome: ")
    notas = [
        ler_decimal(f"Informe a nota de {disciplina} (0-100): ")
        for disciplina in Configuracoes.DISCIPLINAS
    ]
    frequencia = ler_decimal("Informe a frequência percentual (0-100): ")

    if not validar_notas_e_frequencia(notas, frequencia):
        print("Notas/frequência inválidas. Cadastro cancelado.")
        return

    estudante = Estudante(name=nome, roll=matricula, marks=notas, attendance=frequencia)
    try:
        resultado = servico.adicionar(estudante)
    except ErroMatriculaDuplicada:
        print("Falha ao adicionar aluno: matrícula já cadastrada.")
        return
    _avisar_persistencia(resultado)
    print("Aluno adicionado com sucesso.")


def atualizar_aluno(servico: ServicoEstudantes) -> None:
    matricula = ler_inteiro("Informe a matrícula a atualizar: ")
    try:
        atual = servico.obter_por_matricula(matricula)
    except ErroRegistroNaoEncontrado:
        print(f"Aluno com matrícula {matricula} não encontrado.")
        return

    print("Registro atual:")
    exibir_estudante(atual)
    nome = input("Novo nome (vazio mantém o atual): ")
    notas = [
        ler_decimal_opcional(f"Nova nota de {disciplina} (vazio mantém {nota:.2f}): ", nota)
        for disciplina, nota in zip(Configuracoes.DISCIPLINAS, atual.marks)
    ]
    frequencia = ler_decimal_opcional(
        f"Nova frequência (vazio mantém {atual.attendance:.2f}): ", atual.attendance
    )

    if not validar_notas_e_frequencia(notas, frequencia):
        print("Notas/frequência inválidas. Atualização cancelada.")
        return

    resultado = servico.atualizar(matricula, nome=nome or None, notas=notas, frequencia=frequencia)
    _avisar_persistencia(resultado)
    print("Aluno atualizado com sucesso.")


def remover_aluno(servico: ServicoEstudantes) -> None:
    matricula = ler_inteiro("Informe a matrícula a remover: ")
    try:
        resultado = servico.remover(matricula)
    except ErroRegistroNaoEncontrado:
        print(f"Aluno com matrícula {matricula} não encontrado.")
        return
    _avisar_persistencia(resultado)
    print("Aluno removido.")


def buscar_aluno(servico: ServicoEstudantes) -> None:
    print("Buscar por: 1) Matrícula  2) Nome")
    opcao = ler_inteiro("Escolha a opção: ")
    try:
        if opcao == 1:
            estudante = servico.obter_por_matricula(ler_inteiro("Informe a matrícula: "))
        else:
            estudante = servico.obter_por_nome(input("Informe o nome exato: "))
    except ErroRegistroNaoEncontrado:
        print("Não encontrado.")
        return
    exibir_estudante(estudante)


def listar_alunos(servico: ServicoEstudantes) -> None:
    estudantes = servico.listar()
    if estudantes is None:
        print("Nenhum registro de aluno disponível.")
        return
    for estudante in estudantes:
        exibir_estudante(estudante)


def analisar_aluno(servico: ServicoEstudantes, avaliador: ServicoAvaliacao) -> None:
    matricula = ler_inteiro("Informe a matrícula para análise por IA: ")
    try:
        estudante = servico.obter_por_matricula(matricula)
    except ErroRegistroNaoEncontrado:
        print("Aluno não encontrado.")
        return

    resultado = avaliador.avaliar(estudante)
    print(f"Análise por IA de {estudante.name} (Matrícula {estudante.roll}):")
    print(f"Nível de risco  : {resultado.risk.value}")
    print(f"Área sugerida   : {resultado.career}")
    print(f"Explicação      : {resultado.explanation or 'None'}")


def executar_menu(servico: ServicoEstudantes, avaliador: ServicoAvaliacao) -> None:
    """Laço principal; retorna quando o usuário escolhe sair ou a entrada termina."""
    acoes = {
        1: adicionar_aluno,
        2: atualizar_aluno,
        3: remover_aluno,
        4: buscar_aluno,
        5: listar_alunos,
        6: lambda sessao: analisar_aluno(sessao, avaliador),
    }
    while True:
        print(OPCOES_MENU)
        try:
            escolha = ler_inteiro("Informe a opção: ")
            if escolha == 7:
                return
            acao = acoes.get(escolha)
            if acao is None:
                print("Opção inválida, tente novamente.")
                continue
            acao(servico)
        except EOFError:
            return


def main(caminho: str | None = None) -> int:
    """Abre a sessão, executa o menu e salva a base ao sair.

    Parâmetros:
    - caminho (str | None): arquivo de registros; usa DATA_PATH quando omitido

    Retorno:
    - int: código de saída
    """
    servico = ServicoEstudantes(caminho=caminho)
    try:
        servico.iniciar()
    except ErroPersistencia as erro:
        logger.warning(f"Falha ao carregar base: {erro}")
        print("Aviso: falha ao carregar o arquivo da base. Iniciando com base vazia.")

    try:
        executar_menu(servico, ServicoAvaliacao())
    finally:
        if not servico.encerrar():
            print("Aviso: falha ao salvar a base ao sair.")
    print("Encerrando. Até logo!")
    return 0


if __name__ == "__main__":
    exit(main())
