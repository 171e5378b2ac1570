"""
amb Grammar Definition.

This module contains the Lark grammar for amb search blocks:

    amb {
        let x = choice(1..=5);
        let y = choice(1..=5);
        require(x + y == 5);
        (x, y)
    }

Expressions follow Python's operator precedence once emitted.
"""

amb_grammar = r"""
    start: amb_block | body

    amb_block: _AMB "{" body "}"
    body: statement* result?

    // --- Statements ---
    ?statement: bind_stmt | let_stmt | require_stmt | expr_stmt

    bind_stmt: _LET pattern "=" choice_call ";"
    let_stmt: _LET pattern "=" expr ";"
    require_stmt: _REQUIRE "(" expr ")" ";"
    expr_stmt: expr ";"

    result: _RETURN expr ";"?            -> return_result
          | expr                          -> tail_result

    choice_call: _CHOICE "(" expr ")"

    // --- Binder patterns ---
    pattern: NAME                                     -> name_pattern
           | "(" pattern "," ")"                      -> tuple_pattern
           | "(" pattern ("," pattern)+ ","? ")"      -> tuple_pattern

    // --- Expressions ---
    ?expr: op_expr
         | op_expr RANGE_OP op_expr                   -> range_expr

    ?op_expr: unary
            | unary (OPERATOR unary)+                 -> binary_expr

    ?unary: postfix
          | UNARY_OP unary                            -> unary_expr

    ?postfix: atom
            | postfix "(" call_args? ")"              -> call_expr
            | postfix "." NAME                        -> attr_expr
            | postfix "[" expr "]"                    -> index_expr

    call_args: expr ("," expr)* ","?

    ?atom: NAME                                       -> name
         | NUMBER                                     -> number
         | STRING                                     -> string
         | "(" expr ")"                               -> paren_expr
         | "(" ")"                                    -> tuple_expr
         | "(" expr "," ")"                           -> tuple_expr
         | "(" expr ("," expr)+ ","? ")"              -> tuple_expr
         | "[" (expr ("," expr)* ","?)? "]"           -> list_expr

    // --- Terminals ---
    _AMB: /amb\b/
    _LET: /let\b/
    _REQUIRE: /require\b/
    _CHOICE: /choice\b/
    _RETURN: /return\b/
    RANGE_OP: /\.\.=?/
    OPERATOR: /==|!=|>=|<=|&&|\|\||\*\*|[+\-*\/%<>]|(?:and|or|in)\b/
    UNARY_OP: /-|!(?!=)|not\b/
    STRING: /"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'/
    NUMBER: /\d+(\.\d+)?/
    NAME: /(?!(?:let|require|choice|return|amb|and|or|not|in)\b)[a-zA-Z_]\w*/

    COMMENT_1: /\/\/[^\n]*/
    COMMENT_2: /\#[^\n]*/
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//

    %import common.WS
    %ignore WS
    %ignore COMMENT_1
    %ignore COMMENT_2
    %ignore BLOCK_COMMENT
"""
