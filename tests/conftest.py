#!/usr/bin/env python3
"""
Shared fixtures for sequence analysis tests.
"""

import pytest

from vseq_engine.analysis.restriction import get_enzyme


GENBANK_TEXT = """\
LOCUS       pTEST                     60 bp    DNA     circular SYN 01-JAN-2024
DEFINITION  Test plasmid.
FEATURES             Location/Qualifiers
     source          1..60
                     /organism="synthetic construct"
     gene            complement(10..30)
                     /gene="lacZ"
                     /note="first line
                     second line"
     CDS             join(1..9,
                     31..45)
                     /product="Test protein"
                     /label=tp
ORIGIN
        1 atgaaagaat tcaaataagg atccaaaaaa aaaaaaaaaa aaaaaaaaaa aaaaaaaaaa
//
"""

EMBL_TEXT = """\
ID   X56734; SV 1; linear; mRNA; STD; PLN; 20 BP.
XX
AC   X56734; S46826;
XX
FT   source          1..20
FT                   /organism="Trifolium repens"
FT   CDS             3..14
FT                   /gene="lin"
FT                   /product="linamarase"
SQ   Sequence 20 BP; 8 A; 3 C; 2 G; 4 T; 0 other;
     aaacaaacca aatatggatt        20
//
"""

GFF3_TEXT = (
    "##gff-version 3\n"
    "chr1\t.\tgene\t100\t200\t.\t-\t.\tID=g1;Name=my%20gene\n"
    "chr1\t.\tCDS\tabc\t200\t.\t+\t.\tID=c1\n"
    "chr1\t.\texon\t5\t50\t.\t+\t.\tgene=xyz\n"
    "##FASTA\n"
    ">chr1\n"
    "ACGT\n"
)


@pytest.fixture
def genbank_text():
    """Small circular GenBank record with a gene, a CDS and two sites."""
    return GENBANK_TEXT


@pytest.fixture
def embl_text():
    return EMBL_TEXT


@pytest.fixture
def gff3_text():
    return GFF3_TEXT


@pytest.fixture
def ecori():
    return get_enzyme("EcoRI")


@pytest.fixture
def bamhi():
    return get_enzyme("BamHI")
