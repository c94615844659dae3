class InvalidArgumentError(ValueError):
    """
    Blad zglaszany przy niepoprawnym argumencie warstwy buyable.

    Zglaszany m.in. gdy klucz nie nalezy do rozpoznanych atrybutow spec/buyable,
    gdy odczyt pola spec nie jest jednoznaczny (brak `specify` i produkt nie jest
    single-spec) lub gdy wartosc pola nie przechodzi walidacji.
    """
