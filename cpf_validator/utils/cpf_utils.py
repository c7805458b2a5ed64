"""
Módulo utilitário para validação e normalização de CPF.
Funções puras, sem estado e sem I/O: seguras para chamadas concorrentes.
"""
import re
from typing import Any, Tuple

# Tabelas de pesos dos dígitos verificadores (constantes, nunca alteradas)
FIRST_MULTIPLIER: Tuple[int, ...] = (10, 9, 8, 7, 6, 5, 4, 3, 2)
SECOND_MULTIPLIER: Tuple[int, ...] = (11, 10, 9, 8, 7, 6, 5, 4, 3, 2)

CPF_LENGTH = 11

_NON_DIGIT = re.compile(r"\D", re.ASCII)


class CPFUtils:
    @staticmethod
    def normalize_cpf(cpf: str) -> str:
        """
        Remove caracteres não numéricos do CPF.
        Parâmetros:
            cpf (str): CPF em qualquer formato
        Retorno:
            str: CPF apenas com dígitos
        Exemplo: '111.444.777-35' -> '11144477735'
        """
        return _NON_DIGIT.sub("", cpf)

    @staticmethod
    def _check_digit(digits: str, weights: Tuple[int, ...]) -> int:
        remainder = sum(int(d) * w for d, w in zip(digits, weights)) % 11
        return 0 if remainder < 2 else 11 - remainder

    @staticmethod
    def calculate_check_digits(base9: str) -> Tuple[int, int]:
        """
        Calcula os dois dígitos verificadores a partir dos 9 primeiros dígitos.
        Parâmetros:
            base9 (str): 9 primeiros dígitos do CPF
        Retorno:
            Tuple[int, int]: (décimo dígito, décimo primeiro dígito), ambos 0-9
        """
        first_digit = CPFUtils._check_digit(base9, FIRST_MULTIPLIER)
        second_digit = CPFUtils._check_digit(base9 + str(first_digit), SECOND_MULTIPLIER)
        return first_digit, second_digit

    @staticmethod
    def is_valid_cpf(cpf: Any) -> bool:
        """
        Valida CPF pelo algoritmo dos dígitos verificadores.
        Nunca lança exceção: qualquer entrada malformada retorna False.
        Parâmetros:
            cpf (str): CPF em qualquer formato (pontuação e espaços são ignorados)
        Retorno:
            bool: True se válido, False caso contrário
        """
        if not isinstance(cpf, str) or not cpf.strip():
            return False

        cpf = CPFUtils.normalize_cpf(cpf)

        # CPF não pode ter todos os dígitos iguais, mesmo que passe no cálculo
        if len(cpf) != CPF_LENGTH or cpf == cpf[0] * CPF_LENGTH:
            return False

        first_digit, second_digit = CPFUtils.calculate_check_digits(cpf[:9])
        return int(cpf[9]) == first_digit and int(cpf[10]) == second_digit
