"""Sample X12 documents used by the test suite."""


def make_isa(version="00401", repetition="U", element="*", component=">", terminator="~"):
    """Build a well-formed ISA segment with the given delimiters."""
    fields = [
        "00", " " * 10, "00", " " * 10,
        "ZZ", "SENDER".ljust(15), "ZZ", "RECEIVER".ljust(15),
        "230101", "1200", repetition, version, "000000001", "0", "P", component,
    ]
    return "ISA" + element + element.join(fields) + terminator


SAMPLE_835 = (
    "ISA*00*          *00*          *ZZ*SENDER         *ZZ*RECEIVER       "
    "*230101*1200*^*00501*000000001*0*P*:~"
    "GS*HP*SENDER*RECEIVER*20230101*1200*1*X*005010X221A1~"
    "ST*835*0001~"
    "BPR*I*1500.00*C*ACH*CCP*01*999999999*DA*123456789*9876543210**01*999999999*DA*987654321*20230115~"
    "TRN*1*ABC123456*1234567890~"
    "DTM*405*20230115~"
    "N1*PR*ACME INSURANCE CO*XV*12345~"
    "N1*PE*DR SMITH MEDICAL GROUP*XX*1234567890~"
    "CLP*CLM001*1*500.00*400.00*50.00*12*PAYERCLM001~"
    "NM1*QC*1*DOE*JOHN****MI*MEM001~"
    "NM1*82*1*SMITH*JAMES****XX*1234567890~"
    "DTM*232*20221215~"
    "DTM*233*20221215~"
    "CAS*CO*45*50.00~"
    "CAS*PR*2*50.00~"
    "SVC*HC:99213*250.00*200.00**1~"
    "DTM*472*20221215~"
    "CAS*CO*45*25.00~"
    "CAS*PR*2*25.00~"
    "CLP*CLM002*1*1000.00*800.00*100.00*12*PAYERCLM002~"
    "NM1*QC*1*SMITH*JANE****MI*MEM002~"
    "SVC*HC:99215*500.00*400.00**1~"
    "DTM*472*20221220~"
    "CAS*CO*45*50.00~"
    "SE*23*0001~"
    "GE*1*1~"
    "IEA*1*000000001~"
)

SAMPLE_837 = (
    "ISA*00*          *00*          *ZZ*SENDER         *ZZ*RECEIVER       "
    "*230201*0800*^*00501*000000002*0*P*:~\n"
    "GS*HC*SENDER*RECEIVER*20230201*0800*2*X*005010X222A1~\n"
    "ST*837*0002*005010X222A1~\n"
    "BHT*0019*00*BATCH001*20230201*0800*CH~\n"
    "HL*1**20*1~\n"
    "NM1*85*2*SMITH MEDICAL GROUP*****XX*1234567890~\n"
    "N3*123 MAIN STREET~\n"
    "N4*ANYTOWN*CA*90210~\n"
    "REF*EI*123456789~\n"
    "HL*2*1*22*1~\n"
    "SBR*P*18*GRP001*ACME PLAN*****CI~\n"
    "NM1*IL*1*DOE*JOHN*M***MI*MEM001~\n"
    "DMG*D8*19800115*M~\n"
    "CLM*PAT001*350.00***11:B:1*Y*A*Y*Y~\n"
    "DTP*431*D8*20230115~\n"
    "HI*ABK:J06.9*ABF:R50.9~\n"
    "SV1*HC:99213:25*150.00*UN*1*11~\n"
    "DTP*472*D8*20230115~\n"
    "SE*17*0002~\n"
    "GE*1*2~\n"
    "IEA*1*000000002~\n"
)


def control_char_document():
    """A small 00501 interchange delimited by ASCII control characters."""
    segments = [
        "GS\x1dHC\x1dSENDER\x1dRECEIVER\x1d20230201\x1d0800\x1d2\x1dX\x1d005010X222A1",
        "ST\x1d837\x1d0002",
        "NM1\x1d85\x1d2\x1dSMITH MEDICAL GROUP\x1d\x1d\x1d\x1d\x1dXX\x1d1234567890",
        "REF\x1dEI\x1d\x1d",
        "SE\x1d4\x1d0002",
        "GE\x1d1\x1d2",
        "IEA\x1d1\x1d000000001",
    ]
    isa = make_isa(version="00501", repetition="^", element="\x1d", component="\x1f",
                   terminator="\x1c")
    return isa + "\r\n" + "\x1c\r\n".join(segments) + "\x1c"
